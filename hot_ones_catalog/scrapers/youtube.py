"""Attach YouTube links from the Hot Ones channel feed to scraped episodes."""

import asyncio
import re
import sys
from datetime import datetime
from typing import Any, Optional

import aiohttp
import feedparser
from dateutil import parser as date_parser
from pydantic import ValidationError

from ..constants.config import FEED_FETCH_TIMEOUT_SECONDS, YOUTUBE_FEED_URL
from ..models.episode import EpisodeModel
from ..models.video import VideoFeedEntry
from ..utils.normalization import build_search_url, episode_lookup_keys, generate_matching_keys


VIDEO_ID_PATTERN = re.compile(r"[?&]v=([^&]+)")


class FeedError(Exception):
    """The channel feed could not be fetched or parsed."""


def extract_video_id(url: str) -> str:
    """Pull the ``v`` parameter out of a watch URL."""
    match = VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else ""


def parse_published_date(item: Any) -> str:
    """Return the entry's publish date as YYYY-MM-DD, or '' if it has none."""
    published_parsed = item.get("published_parsed")
    if published_parsed:
        return datetime(*published_parsed[:6]).date().isoformat()

    published = item.get("published")
    if published:
        return date_parser.parse(published).date().isoformat()

    return ""


def parse_feed_entry(item: Any) -> Optional[VideoFeedEntry]:
    """
    Convert a feedparser entry into a VideoFeedEntry.

    Args:
        item: feedparser entry (or any mapping with the same keys)

    Returns:
        VideoFeedEntry, or None if the entry is unusable
    """
    title = (item.get("title") or "").strip()
    try:
        link = item.get("link") or ""
        if not title or not link:
            raise ValueError("entry has no title or link")

        statistics = item.get("media_statistics") or {}
        view_count = int(statistics.get("views") or 0)

        return VideoFeedEntry(
            title=title,
            url=link,
            video_id=extract_video_id(link) or item.get("yt_videoid") or "",
            published_date=parse_published_date(item),
            description=item.get("summary") or "",
            view_count=view_count,
        )
    except (ValueError, TypeError, OverflowError, ValidationError) as e:
        print(f"Warning: Failed to parse video item '{title or 'Unknown'}': {e}", file=sys.stderr)
        return None


def parse_feed(content: bytes) -> list[VideoFeedEntry]:
    """
    Parse raw feed XML into video entries, newest first as published.

    Raises:
        FeedError: If the document is not a readable feed
    """
    feed = feedparser.parse(content)

    if feed.bozo and not feed.entries:
        error = getattr(feed, "bozo_exception", "Unknown parsing error")
        raise FeedError(f"Malformed YouTube feed: {error}")

    entries = []
    for item in feed.entries:
        entry = parse_feed_entry(item)
        if entry:
            entries.append(entry)
    return entries


async def fetch_feed_entries(
    session: aiohttp.ClientSession,
    url: str = YOUTUBE_FEED_URL,
    timeout: float = FEED_FETCH_TIMEOUT_SECONDS,
) -> list[VideoFeedEntry]:
    """
    Fetch and parse the channel feed.

    Raises:
        FeedError: On a non-200 status or an unparseable document
        aiohttp.ClientError, asyncio.TimeoutError: On network failure
    """
    async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
        if response.status != 200:
            raise FeedError(f"Failed to fetch {url}: HTTP {response.status}")
        content = await response.read()

    return parse_feed(content)


def build_video_index(entries: list[VideoFeedEntry]) -> dict[str, VideoFeedEntry]:
    """
    Map every matching key of every entry to that entry.

    The first entry to claim a key keeps it. The feed lists newest videos
    first, so newer uploads win key collisions.
    """
    index: dict[str, VideoFeedEntry] = {}
    for entry in entries:
        for key in generate_matching_keys(entry.title):
            if key not in index:
                index[key] = entry
    return index


def match_episode(episode: EpisodeModel, index: dict[str, VideoFeedEntry]) -> Optional[VideoFeedEntry]:
    """Find the feed entry for an episode, trying its lookup keys in order."""
    for key in episode_lookup_keys(episode.title):
        entry = index.get(key)
        if entry:
            return entry
    return None


def enhance_episode(episode: EpisodeModel, index: dict[str, VideoFeedEntry]) -> EpisodeModel:
    """Return a copy of the episode with a direct video link or a search URL."""
    entry = match_episode(episode, index)

    if entry:
        return episode.model_copy(update={
            "video_url": entry.url,
            "video_id": entry.video_id or None,
            "video_view_count": entry.view_count,
            "video_published_date": entry.published_date or None,
            "video_search_url": None,
        })

    return episode.model_copy(update={
        "video_url": None,
        "video_id": None,
        "video_view_count": None,
        "video_published_date": None,
        "video_search_url": build_search_url(
            episode.title,
            episode.season_number,
            episode.episode_number,
        ),
    })


def enhance_episodes(episodes: list[EpisodeModel], index: dict[str, VideoFeedEntry]) -> list[EpisodeModel]:
    """Enhance every episode against a prebuilt video index, keeping order."""
    return [enhance_episode(episode, index) for episode in episodes]


async def enhance_with_youtube(
    episodes: list[EpisodeModel],
    session: aiohttp.ClientSession,
    feed_url: str = YOUTUBE_FEED_URL,
) -> list[EpisodeModel]:
    """
    Best-effort YouTube enhancement.

    A feed failure never aborts the scrape: every episode then gets a
    search URL instead of a direct link.

    Args:
        episodes: Scraped episodes
        session: aiohttp session to fetch the feed with
        feed_url: Channel feed URL

    Returns:
        New list of enhanced episodes in the same order
    """
    print("[YouTube] Fetching Hot Ones channel feed...", file=sys.stderr)

    try:
        entries = await fetch_feed_entries(session, feed_url)
        print(f"[YouTube] Found {len(entries)} videos in feed", file=sys.stderr)
    except (FeedError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        print(f"Warning: Could not load YouTube feed, using search links: {e}", file=sys.stderr)
        entries = []

    index = build_video_index(entries)
    enhanced = enhance_episodes(episodes, index)

    matched = sum(1 for episode in enhanced if episode.video_url)
    print(f"[YouTube] Matched {matched}/{len(enhanced)} episodes to videos", file=sys.stderr)

    return enhanced
