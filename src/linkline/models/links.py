"""Link rendering request and response models."""

from pydantic import BaseModel, Field


class LinkItem(BaseModel):
    """A URL and the title to render for it."""

    url: str = Field(..., description="Article URL, inserted verbatim into href")
    title: str = Field(default="", description="Article title")


class SegmentResponse(BaseModel):
    """Response body for segmenting a single title."""

    html: str


class RenderRequest(BaseModel):
    """Request body for rendering a list of links."""

    items: list[LinkItem] = Field(..., max_length=500)


class RenderedItem(BaseModel):
    """Rendering result for one link."""

    url: str
    title: str
    html: str | None = None
    skipped: bool


class RenderResponse(BaseModel):
    """Response body for rendering a list of links."""

    html: str = Field(..., description="Rendered fragments, one per line")
    preview_html: str = Field(..., description="Rendered fragments with skip notices")
    items: list[RenderedItem]
