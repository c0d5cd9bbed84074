"""Link segmentation and rendering endpoint handlers."""

import logging

from fastapi import APIRouter

from linkline.core.compose import compose_links
from linkline.core.segmenter import segment_title
from linkline.models.links import (
    LinkItem,
    RenderedItem,
    RenderRequest,
    RenderResponse,
    SegmentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/links/segment", response_model=SegmentResponse)
async def segment_link(item: LinkItem) -> SegmentResponse:
    """Render one title as a bold/middle/linked HTML fragment.

    The title is segmented as given; no usability filtering is applied.
    """
    return SegmentResponse(html=segment_title(item.title, item.url))


@router.post("/links/render", response_model=RenderResponse)
async def render_links(request: RenderRequest) -> RenderResponse:
    """Render a list of links into one HTML document.

    Items whose title is empty or carries a fetch error marker are skipped.
    Output order follows input order.
    """
    document = compose_links((item.url, item.title) for item in request.items)

    logger.info(f"Rendered {len(document.links)} links")

    return RenderResponse(
        html=document.html,
        preview_html=document.preview_html,
        items=[
            RenderedItem(
                url=link.url,
                title=link.title,
                html=link.html,
                skipped=link.skipped,
            )
            for link in document.links
        ],
    )
