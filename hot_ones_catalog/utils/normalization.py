"""Normalization utilities for dates, titles and matching keys."""

import re
import sys
from datetime import datetime
from typing import List
from urllib.parse import quote

from ..constants.config import (
    MATCHING_STOP_WORDS,
    MIN_MATCHING_KEY_LENGTH,
    SEARCH_QUERY_SUFFIX,
    SHOW_NAME,
    SHOW_NAME_PREFIXES,
    TITLE_SEPARATORS,
    YOUTUBE_SEARCH_URL,
)

AIR_DATE_PATTERN = re.compile(r"^[A-Za-z]+ \d{1,2}, \d{4}$")
AIR_DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y")
EPISODE_LABEL_PATTERN = re.compile(r"S\d+E(\d+)")
SEASON_HEADER_PATTERN = re.compile(r"Season (\d+)")

PREFIX_PATTERNS = [
    re.compile(rf"^{re.escape(prefix)}[:\-\s]*(.+)", re.IGNORECASE)
    for prefix in SHOW_NAME_PREFIXES
]
STOP_WORDS_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(word) for word in MATCHING_STOP_WORDS) + r")\b",
    re.IGNORECASE,
)
SHOW_PREFIX_PATTERN = re.compile(r"^hot ones[:\-\s]*", re.IGNORECASE)
TITLE_SUFFIX_PATTERNS = [
    re.compile(r"\s*\|\s*.*$"),
    re.compile(r"\s*–\s*.*$"),
    re.compile(r"\s*-\s*.*$"),
]

# encodeURIComponent leaves these unescaped
URI_COMPONENT_SAFE = "-_.!~*'()"


def parse_season_number(text: str) -> int:
    """Parse 'Season 12' style header text; 0 when no number is present."""
    match = SEASON_HEADER_PATTERN.search(text)
    return int(match.group(1)) if match else 0


def parse_episode_number(label: str) -> int:
    """Parse an 'S01E05' style label; 0 when it does not match."""
    match = EPISODE_LABEL_PATTERN.search(label)
    return int(match.group(1)) if match else 0


def is_air_date_text(text: str) -> bool:
    """Check for the 'Month D, YYYY' shape used on the listing page."""
    return bool(AIR_DATE_PATTERN.match(text))


def parse_air_date(date_string: str) -> str:
    """
    Convert 'August 4, 2025' to '2025-08-04'.

    Returns the input unchanged if it cannot be parsed as a calendar date.
    """
    for date_format in AIR_DATE_FORMATS:
        try:
            return datetime.strptime(date_string, date_format).date().isoformat()
        except ValueError:
            continue

    print(f"Warning: Failed to parse date: {date_string}", file=sys.stderr)
    return date_string


def find_air_date(candidates: List[str]) -> str:
    """Return the normalized first date-shaped candidate, or '' if none."""
    for candidate in candidates:
        text = candidate.strip()
        if is_air_date_text(text):
            return parse_air_date(text)
    return ""


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends."""
    return re.sub(r"\s+", " ", text).strip()


def strip_stop_words(key: str) -> str:
    """Remove stop words and show names from a matching key."""
    return collapse_whitespace(STOP_WORDS_PATTERN.sub("", key))


def _dedupe(keys: List[str]) -> List[str]:
    seen: set[str] = set()
    unique = []
    for key in keys:
        if key not in seen:
            seen.add(key)
            unique.append(key)
    return unique


def generate_matching_keys(title: str) -> List[str]:
    """
    Derive the lookup keys for a YouTube video title.

    Produces the full normalized title, the title without a show-name prefix,
    the text before each known separator, and stop-word-cleaned variants of
    all of those (kept only when longer than two characters).

    Args:
        title: Video title as published

    Returns:
        Unique keys in derivation order
    """
    normalized = title.lower().strip()
    keys = [normalized]

    for pattern in PREFIX_PATTERNS:
        match = pattern.match(normalized)
        if match and match.group(1):
            keys.append(match.group(1).strip())

    # Guest name usually comes before the separator
    for separator in TITLE_SEPARATORS:
        parts = normalized.split(separator)
        if len(parts) > 1:
            guest_part = parts[0].strip()
            if guest_part and guest_part != normalized:
                keys.append(guest_part)

    cleaned_keys = [strip_stop_words(key) for key in keys]
    cleaned_keys = [key for key in cleaned_keys if len(key) >= MIN_MATCHING_KEY_LENGTH]

    return _dedupe(keys + cleaned_keys)


def clean_episode_title(title: str) -> str:
    """Strip the show-name prefix and any separator-delimited suffix."""
    clean_title = SHOW_PREFIX_PATTERN.sub("", title)
    for pattern in TITLE_SUFFIX_PATTERNS:
        clean_title = pattern.sub("", clean_title)
    return clean_title.strip()


def episode_lookup_keys(title: str) -> List[str]:
    """Keys tried, in order, when matching an episode title against the feed index."""
    normalized = title.lower().strip()
    clean_title = clean_episode_title(title).lower()
    keys = [normalized, clean_title, strip_stop_words(clean_title)]
    return _dedupe([key for key in keys if len(key) >= MIN_MATCHING_KEY_LENGTH])


def build_search_url(title: str, season_number: int = 0, episode_number: int = 0) -> str:
    """
    Build a YouTube search URL for an episode without a direct video match.

    Args:
        title: Episode title
        season_number: Season number (0 if unknown)
        episode_number: Episode number (0 if unknown)

    Returns:
        YouTube results URL for the composed query
    """
    search_terms = []

    clean_title = clean_episode_title(title)
    if clean_title:
        search_terms.append(f'"{clean_title}"')

    search_terms.append(SHOW_NAME)

    if season_number and episode_number:
        search_terms.append(f"season {season_number}")
        search_terms.append(f"episode {episode_number}")

    search_terms.append(SEARCH_QUERY_SUFFIX)

    query = quote(" ".join(search_terms), safe=URI_COMPONENT_SAFE)
    return YOUTUBE_SEARCH_URL.format(query=query)
