"""Title fetching endpoint handlers."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from linkline.api.deps import RequestIdDep, SettingsDep
from linkline.core.fetcher import TitleFetchError, fetch_page_title, fetch_titles
from linkline.models.title import (
    FetchedTitle,
    TitleBatchRequest,
    TitleBatchResponse,
    TitleResponse,
)
from linkline.utils.errors import ErrorCode, create_error_response, http_status_for

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/fetch-title", response_model=TitleResponse)
async def fetch_title(
    settings: SettingsDep,
    request_id: RequestIdDep,
    url: str | None = None,
) -> TitleResponse | JSONResponse:
    """Fetch the title of a single page.

    Args:
        settings: Application settings dependency.
        request_id: Request ID dependency.
        url: Page URL query parameter.

    Returns:
        TitleResponse with the page title, or an error response whose status
        mirrors the upstream failure.
    """
    if not url or not url.strip():
        error = create_error_response(ErrorCode.URL_REQUIRED, request_id=request_id)
        return JSONResponse(
            status_code=http_status_for(ErrorCode.URL_REQUIRED),
            content=error.model_dump(mode="json", exclude_none=True),
        )

    target_url = url.strip()

    try:
        title = await fetch_page_title(target_url, settings.fetch)
    except TitleFetchError as e:
        error = create_error_response(
            e.code,
            error=e.message,
            details=e.details,
            request_id=request_id,
        )
        return JSONResponse(
            status_code=e.status_code,
            content=error.model_dump(mode="json", exclude_none=True),
        )

    logger.info(f"Fetched title for {target_url}: {title!r}", extra={"url": target_url})
    return TitleResponse(title=title)


@router.post("/titles/fetch", response_model=TitleBatchResponse)
async def fetch_title_batch(
    request: TitleBatchRequest,
    settings: SettingsDep,
) -> TitleBatchResponse:
    """Fetch titles for several pages.

    Failures do not fail the request; they come back as placeholder titles
    with ok=False, in the same position as their URL.
    """
    lookups = await fetch_titles(request.urls, settings.fetch)

    failed = sum(1 for lookup in lookups if not lookup.ok)
    if failed:
        logger.warning(f"{failed} of {len(lookups)} title lookups failed")

    return TitleBatchResponse(
        items=[
            FetchedTitle(url=lookup.url, title=lookup.title, ok=lookup.ok)
            for lookup in lookups
        ]
    )
