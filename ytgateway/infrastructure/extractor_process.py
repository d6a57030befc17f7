"""Extractor Process — runs yt-dlp as a child process and captures its output.

Invariants:
    - One child process per run(); nothing shared between runs
    - stdout and stderr are drained concurrently, chunk by chunk, until EOF
    - Spawn failures (missing executable, permissions) map to ExtractorLaunchError
    - A timeout or output-cap breach kills the child, drains its pipes, then raises
    - Post-kill draining is bounded by drain_timeout_seconds; leftover readers are cancelled
    - Cancellation of the awaiting task kills the child before propagating
    - Exit-code and stdout interpretation is NOT done here (see core/extractor_output.py)

Design Decisions:
    - asyncio.wait, not wait_for: reader tasks survive a timeout and drain
      the pipes after the kill
    - Limits are optional: None means unbounded
"""

import asyncio
import logging
import time

from ytgateway.core.errors import (
    ErrorContext,
    ExtractorLaunchError,
    ExtractorOutputTooLargeError,
    ExtractorTimeoutError,
)
from ytgateway.core.extractor_output import ExtractorResult

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024

# Upper bound on reading leftover output once the child has been killed
DRAIN_TIMEOUT_SECONDS = 5.0


class _Capture:
    """Byte buffers for both streams plus the shared output budget."""

    def __init__(self, limit: int | None):
        self.stdout = bytearray()
        self.stderr = bytearray()
        self.limit = limit
        self.total = 0
        self.exceeded = False

    def accept(self, buf: bytearray, chunk: bytes) -> bool:
        """Append chunk unless the budget is spent. Returns False on breach."""
        if self.exceeded:
            return False
        self.total += len(chunk)
        if self.limit is not None and self.total > self.limit:
            self.exceeded = True
            return False
        buf.extend(chunk)
        return True


def _decode(buf: bytearray) -> str:
    return buf.decode("utf-8", errors="replace")


def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass


class ExtractorRunner:
    """Spawns the extractor executable with a given argument list."""

    def __init__(
        self,
        binary: str = "yt-dlp",
        timeout_seconds: float | None = None,
        max_output_bytes: int | None = None,
        drain_timeout_seconds: float = DRAIN_TIMEOUT_SECONDS,
    ):
        self.binary = binary
        self.timeout_seconds = timeout_seconds
        self.max_output_bytes = max_output_bytes
        self.drain_timeout_seconds = drain_timeout_seconds

    async def run(
        self, args: list[str], context: ErrorContext | None = None,
    ) -> ExtractorResult:
        """Run the extractor to completion and return its captured output."""
        action = context.action if context else None
        started = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary, *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(
                f"Failed to start {self.binary}: {e}",
                extra={"action": action},
            )
            raise ExtractorLaunchError(str(e), context)

        logger.info(
            f"Started {self.binary}",
            extra={"action": action, "pid": process.pid},
        )
        capture = _Capture(self.max_output_bytes)
        tasks = [
            asyncio.create_task(
                self._pump(process.stdout, capture.stdout, capture, process),
            ),
            asyncio.create_task(
                self._pump(process.stderr, capture.stderr, capture, process),
            ),
        ]
        waiter = asyncio.create_task(process.wait())

        try:
            _, pending = await asyncio.wait(
                [*tasks, waiter], timeout=self.timeout_seconds,
            )
        except asyncio.CancelledError:
            await self._kill_and_drain(process, [*tasks, waiter], action)
            logger.warning(
                f"{self.binary} killed: request cancelled",
                extra={"action": action, "pid": process.pid},
            )
            raise

        if pending:
            await self._kill_and_drain(process, [*tasks, waiter], action)
            duration_ms = int((time.monotonic() - started) * 1000)
            stderr = _decode(capture.stderr)
            if capture.exceeded:
                raise ExtractorOutputTooLargeError(
                    self.max_output_bytes, stderr, context,
                )
            logger.warning(
                f"{self.binary} timed out after {self.timeout_seconds}s",
                extra={"action": action, "pid": process.pid, "duration_ms": duration_ms},
            )
            raise ExtractorTimeoutError(self.timeout_seconds, stderr, context)

        for task in tasks:
            task.result()
        exit_code = waiter.result()
        duration_ms = int((time.monotonic() - started) * 1000)
        stderr = _decode(capture.stderr)

        if capture.exceeded:
            logger.warning(
                f"{self.binary} output exceeded {self.max_output_bytes} bytes",
                extra={"action": action, "pid": process.pid, "duration_ms": duration_ms},
            )
            raise ExtractorOutputTooLargeError(
                self.max_output_bytes, stderr, context,
            )

        logger.info(
            f"{self.binary} exited",
            extra={
                "action": action, "pid": process.pid,
                "exit_code": exit_code, "duration_ms": duration_ms,
            },
        )
        return ExtractorResult(
            args=list(args),
            exit_code=exit_code,
            stdout=_decode(capture.stdout),
            stderr=stderr,
            duration_ms=duration_ms,
        )

    async def _kill_and_drain(
        self,
        process: asyncio.subprocess.Process,
        tasks: list[asyncio.Task],
        action: str | None,
    ) -> None:
        """Kill the child, give readers a bounded window to hit EOF, cancel the rest.

        A grandchild that inherited the pipes can keep them open past the kill.
        """
        _kill(process)
        _, pending = await asyncio.wait(tasks, timeout=self.drain_timeout_seconds)
        if not pending:
            return
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            f"{self.binary} pipes still open {self.drain_timeout_seconds}s after kill",
            extra={"action": action, "pid": process.pid},
        )

    @staticmethod
    async def _pump(
        stream: asyncio.StreamReader,
        buf: bytearray,
        capture: _Capture,
        process: asyncio.subprocess.Process,
    ) -> None:
        """Read a stream to EOF; on budget breach kill the child and discard the rest."""
        while True:
            chunk = await stream.read(_CHUNK_SIZE)
            if not chunk:
                return
            if not capture.accept(buf, chunk):
                _kill(process)
