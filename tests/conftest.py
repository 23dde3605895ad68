"""Shared pytest fixtures for the hot_ones_catalog test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from hot_ones_catalog.models.episode import EpisodeModel, EpisodeTag

# ---------------------------------------------------------------------------
# Markup fixtures
# ---------------------------------------------------------------------------

SINGLE_SEASON_HTML = """
<html>
<body>
<div class="container">
  <h3 class="mt-4"><a href="/series/hot-ones/seasons/official/1">Season 1</a></h3>
  <ul class="list-group mb-4">
    <li class="list-group-item">
      <h4 class="list-group-item-heading">
        <span class="episode-label">S1E1</span>
        <a href="/series/hot-ones/episodes/1001">Guest One</a>
      </h4>
      <ul class="list-inline text-muted">
        <li>January 1, 2020</li>
        <li>YouTube</li>
      </ul>
      <div class="list-group-item-text">
        <div class="row"><div class="col-xs-9"><p>The guest is a celebrated chef.</p></div></div>
      </div>
    </li>
    <li class="list-group-item">
      <h4 class="list-group-item-heading">
        <span class="episode-label">S1E2</span>
        <a href="/series/hot-ones/episodes/1002">   </a>
      </h4>
      <ul class="list-inline text-muted"><li>January 8, 2020</li></ul>
    </li>
  </ul>
</div>
</body>
</html>
"""

MULTI_SEASON_HTML = """
<html>
<head><meta charset="utf-8"><title>Hot Ones - All Seasons</title></head>
<body>
<div class="container">
  <h3><a href="/series/hot-ones/lists">Not a season</a></h3>
  <ul class="list-group">
    <li class="list-group-item">
      <h4 class="list-group-item-heading"><a href="#">Ignored Item</a></h4>
    </li>
  </ul>

  <h3 class="mt-4"><a href="/series/hot-ones/seasons/official/2">Season 2</a></h3>
  <ul class="list-group mb-4">
    <li class="list-group-item">
      <h4 class="list-group-item-heading">
        <span class="episode-label">S02E01</span>
        <a href="/series/hot-ones/episodes/2001">Actor &amp; Comedian Night</a>
      </h4>
      <ul class="list-inline text-muted">
        <li>Season Premiere</li>
        <li>March 5, 2016</li>
      </ul>
      <div class="list-group-item-text"><p>A stand-up comedian and film actor takes on the wings.</p></div>
    </li>
    <li class="list-group-item">
      <h4 class="list-group-item-heading">
        <span class="episode-label">Special</span>
        <a href="/series/hot-ones/episodes/2002">Mystery Guest</a>
      </h4>
      <ul class="list-inline text-muted"><li>Smarch 40, 2016</li></ul>
    </li>
  </ul>

  <h3 class="mt-4"><a href="/series/hot-ones/seasons/official/3">Season 3</a></h3>
  <div class="alert">Episodes coming soon</div>

  <h3 class="mt-4"><a href="/series/hot-ones/seasons/official/0">Specials</a></h3>
  <ul class="list-group mb-4">
    <li class="list-group-item">
      <h4 class="list-group-item-heading">
        <span class="episode-label">S00E01</span>
        <a href="/series/hot-ones/episodes/9001">The Last Dab</a>
      </h4>
      <div class="list-group-item-text"><p>A <b>behind the scenes</b> look at sauce making.<br>Bonus clip.</p></div>
    </li>
  </ul>
</div>
</body>
</html>
"""

YOUTUBE_FEED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015" xmlns:media="http://search.yahoo.com/mrss/" xmlns="http://www.w3.org/2005/Atom">
 <link rel="self" href="http://www.youtube.com/feeds/videos.xml?channel_id=UCPD_bxCRGpmmeQcbe2kpPaA"/>
 <id>yt:channel:PD_bxCRGpmmeQcbe2kpPaA</id>
 <yt:channelId>PD_bxCRGpmmeQcbe2kpPaA</yt:channelId>
 <title>First We Feast</title>
 <published>2014-01-01T00:00:00+00:00</published>
 <entry>
  <id>yt:video:abc123</id>
  <yt:videoId>abc123</yt:videoId>
  <title>Guest One | Hot Ones</title>
  <link rel="alternate" href="https://www.youtube.com/watch?v=abc123"/>
  <published>2020-01-02T15:00:00+00:00</published>
  <updated>2020-01-03T15:00:00+00:00</updated>
  <media:group>
   <media:title>Guest One | Hot Ones</media:title>
   <media:description>Guest One takes on the wings of death.</media:description>
   <media:community>
    <media:starRating count="1000" average="5.00" min="1" max="5"/>
    <media:statistics views="123456"/>
   </media:community>
  </media:group>
 </entry>
 <entry>
  <id>yt:video:def456</id>
  <yt:videoId>def456</yt:videoId>
  <title>Guest One - Hot Ones Rewind</title>
  <link rel="alternate" href="https://www.youtube.com/watch?v=def456"/>
  <published>2019-06-01T15:00:00+00:00</published>
  <media:group>
   <media:description>Looking back.</media:description>
   <media:community>
    <media:statistics views="42"/>
   </media:community>
  </media:group>
 </entry>
</feed>
"""


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


def make_episode(**overrides: Any) -> EpisodeModel:
    """Build an EpisodeModel with sensible defaults."""
    data: dict[str, Any] = {
        "season_number": 1,
        "episode_number": 1,
        "title": "Guest One",
        "air_date": "2020-01-01",
        "description": "The guest is a celebrated chef.",
        "tags": [EpisodeTag(category="Food/Culinary", sub_categories=["Chef"])],
    }
    data.update(overrides)
    return EpisodeModel(**data)


@pytest.fixture
def sample_episodes() -> list[EpisodeModel]:
    """A small, varied episode list."""
    return [
        make_episode(),
        make_episode(
            episode_number=2,
            title="Jane Doe",
            air_date="2020-01-08",
            description="Jane Doe is a rapper and singer.",
            tags=[EpisodeTag(category="Music", sub_categories=["Rapper", "Singer"])],
            video_url="https://www.youtube.com/watch?v=xyz789",
            video_id="xyz789",
            video_view_count=1500000,
            video_published_date="2020-01-09",
        ),
        make_episode(
            season_number=2,
            episode_number=1,
            title="Mystery Guest",
            air_date="",
            description="",
            tags=[EpisodeTag(category="Other", sub_categories=["Unknown"])],
            video_search_url="https://www.youtube.com/results?search_query=%22Mystery%20Guest%22",
        ),
    ]


# ---------------------------------------------------------------------------
# aiohttp fixtures
# ---------------------------------------------------------------------------


def make_response(status: int = 200, text: str = "", body: bytes = b"", reason: str = "OK") -> MagicMock:
    """Build a mock aiohttp response usable as an async context manager."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.text = AsyncMock(return_value=text)
    response.read = AsyncMock(return_value=body)
    return response


def make_session(*responses: MagicMock) -> MagicMock:
    """Build a mock aiohttp session whose ``get`` yields the given responses in order."""
    session = MagicMock()
    contexts = []
    for response in responses:
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        contexts.append(context)
    session.get = MagicMock(side_effect=contexts)
    return session
