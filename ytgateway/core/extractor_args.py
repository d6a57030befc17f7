"""Extractor Arguments — pure builders for yt-dlp command lines.

Invariants:
    - startIndex = (page - 1) * page_size + 1, endIndex = page * page_size
    - Every invocation asks for exactly one JSON document on stdout (--dump-single-json)
    - The executable name is NOT part of the argument list; the runner prepends it
"""

DUMP_SINGLE_JSON = "--dump-single-json"
FLAT_PLAYLIST = "--flat-playlist"
NO_WARNINGS = "--no-warnings"
NO_CHANNEL_REDIRECT = ("--compat-options", "no-youtube-channel-redirect")


def page_bounds(page: int, page_size: int) -> tuple[int, int]:
    """1-based inclusive playlist slice for a results page."""
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be positive")
    return (page - 1) * page_size + 1, page * page_size


def search_target(keyword: str, page_size: int, provider: str = "ytsearch") -> str:
    """Search pseudo-URL, e.g. ``ytsearch20:lofi beats``."""
    return f"{provider}{page_size}:{keyword}"


def build_search_args(
    keyword: str, page: int, page_size: int, provider: str = "ytsearch",
) -> list[str]:
    start, end = page_bounds(page, page_size)
    return [
        DUMP_SINGLE_JSON,
        FLAT_PLAYLIST,
        NO_WARNINGS,
        "--playlist-start", str(start),
        "--playlist-end", str(end),
        search_target(keyword, page_size, provider),
    ]


def build_info_args(url: str) -> list[str]:
    return [DUMP_SINGLE_JSON, NO_WARNINGS, *NO_CHANNEL_REDIRECT, url]
