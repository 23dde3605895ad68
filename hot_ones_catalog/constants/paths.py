"""File and directory path constants."""

from pathlib import Path

# Cache file, relative to the invocation directory
CACHE_FILENAME = "hot-ones-report.json"
CACHE_PATH = Path(CACHE_FILENAME)
