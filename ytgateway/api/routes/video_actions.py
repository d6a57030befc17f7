"""Video Actions Route — single POST endpoint multiplexed by the `action` query parameter.

Invariants:
    - action is checked before the body is read; unknown actions never parse JSON
    - Body is read raw and decoded by core/request_body.py, not by FastAPI,
      so malformed JSON and schema failures keep their own 400 shapes
    - Success envelope is always {success: true, data, ...}
    - Failures are raised as GatewayError and rendered by api/error_handlers.py
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from ytgateway.config import get_settings
from ytgateway.core.domain_types import VideoAction, parse_action
from ytgateway.core.errors import InvalidActionError
from ytgateway.core.request_body import decode_json_body, validate_body
from ytgateway.infrastructure.extractor_process import ExtractorRunner
from ytgateway.schemas.video import DownloadRequest, InfoRequest, SearchRequest
from ytgateway.services.video_actions import VideoActionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/download-videos", tags=["videos"])

DOWNLOAD_PLACEHOLDER_MESSAGE = "Download started (placeholder)"


def get_video_service() -> VideoActionService:
    """Build the service from settings. Overridden in tests."""
    settings = get_settings()
    runner = ExtractorRunner(
        binary=settings.extractor_binary,
        timeout_seconds=settings.timeout_or_none,
        max_output_bytes=settings.output_cap_or_none,
    )
    return VideoActionService(runner, search_provider=settings.search_provider)


@router.post("")
async def run_video_action(
    request: Request,
    action: str | None = Query(None),
    service: VideoActionService = Depends(get_video_service),
):
    """Dispatch to search, info or download."""
    selected = parse_action(action)
    if selected is None:
        raise InvalidActionError()

    payload = decode_json_body(await request.body())

    if selected is VideoAction.SEARCH:
        req = validate_body(SearchRequest, payload)
        logger.info(
            f"Search '{req.keyword}' page={req.page} size={req.page_size}",
            extra={"action": selected.value},
        )
        return {"success": True, "data": await service.search(req)}

    if selected is VideoAction.INFO:
        req = validate_body(InfoRequest, payload)
        return {"success": True, "data": await service.info(req)}

    req = validate_body(DownloadRequest, payload)
    ticket = await service.download(req)
    return {
        "success": True,
        "message": DOWNLOAD_PLACEHOLDER_MESSAGE,
        "data": ticket.to_payload(),
    }
