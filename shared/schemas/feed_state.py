"""
Observable outcome of the most recent headline fetch.

``FeedState`` is a discriminated union on ``kind``; exactly one variant is
published at a time and each transition replaces the previous snapshot.
"""

from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from shared.schemas.article import Article


class LoadingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"


class DataState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["data"] = "data"
    articles: Tuple[Article, ...] = Field(..., description="Decoded articles in feed order")


class ErrorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str = Field(..., description="Human-readable failure description")
    error_type: str = Field("HeadlineFeedError", description="Name of the failure kind")


FeedState = Annotated[
    Union[LoadingState, DataState, ErrorState],
    Field(discriminator="kind"),
]

feed_state_adapter = TypeAdapter(FeedState)
