"""Review source kinds and app metadata."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SourceKind(str, Enum):
    """Supported review sources."""
    PLAY_STORE = "playstore"
    APP_STORE = "appstore"
    TWITTER = "twitter"

    @classmethod
    def parse(cls, value: "str | SourceKind") -> "SourceKind":
        """
        Resolve a source name, accepting a few common spellings.

        Raises:
            ValueError: If the name is not a known source
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        aliases = {
            "playstore": cls.PLAY_STORE,
            "googleplay": cls.PLAY_STORE,
            "appstore": cls.APP_STORE,
            "itunes": cls.APP_STORE,
            "twitter": cls.TWITTER,
            "x": cls.TWITTER,
        }
        if key not in aliases:
            raise ValueError(f"Unknown source: {value}")
        return aliases[key]


class AppInfo(BaseModel):
    """
    Metadata about the reviewed app.

    For social sources ``title`` holds the search query and ``app_id`` a
    slug used in file names.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    app_id: str = Field(default="", alias="appId")
