"""Video Actions — search, info and download orchestration over the extractor runner.

Invariants:
    - search() always returns a list (single documents are wrapped)
    - info() returns the decoded document as-is
    - download() never spawns a process; it returns a queued placeholder ticket
    - Every extractor failure surfaces as a GatewayError subclass
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from ytgateway.core.domain_types import DownloadId, DownloadStatus, VideoAction
from ytgateway.core.errors import ErrorContext
from ytgateway.core.extractor_args import build_info_args, build_search_args
from ytgateway.core.extractor_output import ExtractorResult, as_entry_list, parse_result
from ytgateway.schemas.video import (
    DownloadRequest, DownloadTicket, InfoRequest, SearchRequest,
)

logger = logging.getLogger(__name__)


class Runner(Protocol):
    """Structural contract for ExtractorRunner (fakes in tests satisfy it too)."""
    async def run(
        self, args: list[str], context: ErrorContext | None = None,
    ) -> ExtractorResult: ...


class VideoActionService:
    """Executes one gateway action per call. Holds no per-request state."""

    def __init__(self, runner: Runner, search_provider: str = "ytsearch"):
        self.runner = runner
        self.search_provider = search_provider

    async def search(self, req: SearchRequest) -> list:
        args = build_search_args(
            req.keyword, req.page, req.page_size, self.search_provider,
        )
        parsed = await self._run_and_parse(VideoAction.SEARCH, args)
        return as_entry_list(parsed)

    async def info(self, req: InfoRequest) -> Any:
        return await self._run_and_parse(
            VideoAction.INFO, build_info_args(req.url),
        )

    async def download(self, req: DownloadRequest) -> DownloadTicket:
        """Placeholder: hands back a queued ticket without downloading anything."""
        ticket = DownloadTicket(
            url=req.url,
            status=DownloadStatus.QUEUED,
            download_id=DownloadId(str(uuid.uuid4())),
            started_at=datetime.now(timezone.utc),
        )
        logger.info(
            f"Download ticket {ticket.download_id} issued (placeholder)",
            extra={"action": VideoAction.DOWNLOAD.value},
        )
        return ticket

    async def _run_and_parse(self, action: VideoAction, args: list[str]) -> Any:
        context = ErrorContext(action=action.value)
        result = await self.runner.run(args, context)
        return parse_result(result, context)
