"""Root conftest — shared test configuration."""

import os

# Keep test runs independent of a developer's local yt-dlp setup
os.environ.setdefault("EXTRACTOR_BINARY", "yt-dlp")
os.environ.setdefault("LOG_FORMAT", "text")
