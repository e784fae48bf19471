"""Review normalization, sentiment scoring and CSV export pipeline."""

__version__ = "0.1.0"
