"""Episode cache access and data quality utilities."""

import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..constants.paths import CACHE_PATH
from ..models.episode import DataQualityReport, EpisodeModel


def load_cached_episodes(path: Path = CACHE_PATH) -> Optional[list[EpisodeModel]]:
    """
    Load episodes from the JSON cache.

    Args:
        path: Cache file path

    Returns:
        List of episodes, or None if the cache is missing or unreadable
    """
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError("cache root is not a list")
        return [EpisodeModel.model_validate(item) for item in data]
    except (OSError, ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"[Cache] Ignoring unreadable cache {path}: {e}", file=sys.stderr)
        return None


def save_episodes(episodes: list[EpisodeModel], path: Path = CACHE_PATH) -> Path:
    """
    Save episodes to the JSON cache, overwriting it.

    Unset optional fields are left out of the file.

    Returns:
        Path the cache was written to
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(
            [episode.model_dump(exclude_none=True) for episode in episodes],
            f,
            indent=2,
            ensure_ascii=False,
        )
    return path


def summarize_data_quality(episodes: list[EpisodeModel]) -> DataQualityReport:
    """Count missing and degraded fields across the scraped episodes."""
    return DataQualityReport(
        total_episodes=len(episodes),
        missing_titles=sum(1 for ep in episodes if not ep.title),
        missing_air_dates=sum(1 for ep in episodes if not ep.air_date),
        missing_descriptions=sum(1 for ep in episodes if not ep.description),
        uncategorized=sum(1 for ep in episodes if ep.is_uncategorized),
        with_video_links=sum(1 for ep in episodes if ep.video_url),
        with_search_urls=sum(1 for ep in episodes if not ep.video_url and ep.video_search_url),
    )