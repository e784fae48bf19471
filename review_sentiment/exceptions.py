"""Exception types raised by the review sentiment pipeline."""


class ReviewPipelineError(Exception):
    """Base class for all pipeline errors."""


class MalformedRecordError(ReviewPipelineError):
    """
    A raw source record could not be turned into a Review.

    Only raised for records that are not mappings at all. Missing optional
    fields never raise. Batch normalization skips the record and reports it.
    """

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Malformed record at index {index}: {reason}")


class InvalidInputError(ReviewPipelineError):
    """The caller passed a value of the wrong shape for a whole request."""


class UploadError(ReviewPipelineError):
    """The blob storage sink failed to store an export."""
