from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Article(BaseModel):
    """One headline retained after decoding and filtering."""

    model_config = ConfigDict(frozen=True)

    title: str = Field("", description="Headline text")
    description: str = Field("", description="Short standfirst from the feed")
    url: str = Field("", description="Canonical article link")
    image_url: str = Field(..., description="Image link, upgraded to https when the feed used http")
    published_at: datetime = Field(..., description="Original publication timestamp (UTC-aware)")
    author: str = Field("Unknown", description="Byline, or 'Unknown' when the feed omits it")
    content: str = Field("", description="Truncated body text from the feed")
