"""yt-dlp Gateway — HTTP front for yt-dlp search and metadata lookups.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
