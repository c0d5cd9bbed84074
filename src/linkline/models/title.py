"""Title fetching request and response models."""

from pydantic import BaseModel, Field


class TitleResponse(BaseModel):
    """Response body for the single title endpoint."""

    title: str = Field(..., description="Page title, or a placeholder if the page has none")


class TitleBatchRequest(BaseModel):
    """Request body for fetching titles of several pages."""

    urls: list[str] = Field(
        ...,
        max_length=200,
        description="Page URLs in display order; blank entries are ignored",
    )


class FetchedTitle(BaseModel):
    """Title lookup result for one URL."""

    url: str
    title: str
    ok: bool = Field(..., description="False when title is an error placeholder")


class TitleBatchResponse(BaseModel):
    """Response body for the batch title endpoint."""

    items: list[FetchedTitle]
