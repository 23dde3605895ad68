"""Episode scraper for the Hot Ones listing on TheTVDB."""

import asyncio
import itertools
import sys
from enum import Enum
from html.parser import HTMLParser
from typing import Callable, Iterable, Iterator, Optional

import aiohttp

from ..constants.config import (
    EPISODE_HEADING_CLASS,
    EPISODE_ITEM_CLASS,
    EPISODE_LABEL_CLASS,
    EPISODE_LIST_CLASS,
    EPISODE_META_CLASS,
    EPISODE_TEXT_CLASS,
    PAGE_FETCH_TIMEOUT_SECONDS,
    REQUEST_HEADERS,
    SEASON_LINK_PATH,
    TVDB_SERIES_URL,
    YOUTUBE_FEED_URL,
)
from ..models.episode import EpisodeModel, RawEpisodeFields
from ..utils.classification import classify
from ..utils.normalization import (
    collapse_whitespace,
    find_air_date,
    parse_episode_number,
    parse_season_number,
)


PARSER_CHUNK_SIZE = 64 * 1024

# Elements that never get an end tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Markers whose text content is collected while they are open
TEXT_MARKERS = ("season_link", "label", "title", "date", "paragraph")

# Markers whose text is kept as written apart from trimming
VERBATIM_MARKERS = frozenset({"title", "paragraph"})

# Start tags that implicitly close an open <p>
P_CLOSING_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "details", "div", "dl",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
    "h4", "h5", "h6", "header", "hgroup", "hr", "main", "menu", "nav", "ol",
    "p", "pre", "section", "table", "ul",
})

# Elements an implied end tag never reaches past
P_SCOPE_BOUNDARIES = frozenset({
    "applet", "button", "caption", "html", "marquee", "object", "table",
    "td", "template", "th",
})
LI_SCOPE_BOUNDARIES = P_SCOPE_BOUNDARIES | {"ol", "ul", "menu"}


class ScrapeError(Exception):
    """Base error for scrape failures."""


class FetchError(ScrapeError):
    """The listing page could not be fetched (HTTP error, network error or timeout)."""


class ScrapeState(str, Enum):
    """Stages of a scrape run."""

    IDLE = "idle"
    FETCHING = "fetching"
    PARSING = "parsing"
    EXTRACTING = "extracting"
    ENHANCING = "enhancing"
    DONE = "done"
    FAILED = "failed"


class EpisodeListHTMLParser(HTMLParser):
    """
    Parse the all-seasons listing page into raw episode fields.

    Season sections are ``<h3>`` headings linking to a season page, each
    followed by a ``.list-group`` sibling holding ``.list-group-item`` episodes.
    Finished episodes are queued and collected with :meth:`drain`.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.season_count = 0
        self._completed: list[RawEpisodeFields] = []

        # Open element tags; an element's depth is its index in this list
        self._stack: list[str] = []
        # Marker name -> depth of the element that opened it
        self._open: dict[str, int] = {}
        self._text: dict[str, list[str]] = {name: [] for name in TEXT_MARKERS}

        # Season state
        self._season_number = 0
        self._season_label = ""
        self._heading_season_label: Optional[str] = None
        self._awaiting_sibling_depth: Optional[int] = None

        # Episode item state
        self._item: Optional[RawEpisodeFields] = None
        self._item_captured: set[str] = set()

    def drain(self) -> list[RawEpisodeFields]:
        """Return and clear the episodes completed so far."""
        completed, self._completed = self._completed, []
        return completed

    def handle_starttag(self, tag: str, attrs: list[tuple[str, Optional[str]]]):
        self._close_implied(tag)

        attrs_dict = dict(attrs)
        classes = set((attrs_dict.get("class") or "").split())
        depth = len(self._stack)

        # The element right after a season heading must be its episode list
        if self._awaiting_sibling_depth is not None and depth == self._awaiting_sibling_depth:
            self._awaiting_sibling_depth = None
            if EPISODE_LIST_CLASS in classes:
                self._open["container"] = depth
            else:
                self._warn_missing_container()

        if tag == "h3" and "heading" not in self._open:
            self._open["heading"] = depth
            self._heading_season_label = None

        if (
            tag == "a"
            and "heading" in self._open
            and self._heading_season_label is None
            and "season_link" not in self._open
            and SEASON_LINK_PATH in (attrs_dict.get("href") or "")
        ):
            self._start_text("season_link", depth)

        if "container" in self._open:
            self._handle_item_starttag(tag, classes, depth)

        if tag not in VOID_ELEMENTS:
            self._stack.append(tag)

    def _handle_item_starttag(self, tag: str, classes: set[str], depth: int):
        if self._item is None:
            if EPISODE_ITEM_CLASS in classes:
                self._open["item"] = depth
                self._item = RawEpisodeFields(
                    season_number=self._season_number,
                    season_label=self._season_label,
                )
                self._item_captured = set()
            return

        if EPISODE_LABEL_CLASS in classes and self._can_capture("label"):
            self._start_text("label", depth)

        if tag == "h4" and EPISODE_HEADING_CLASS in classes and "item_heading" not in self._open:
            self._open["item_heading"] = depth
        if tag == "a" and "item_heading" in self._open and self._can_capture("title"):
            self._start_text("title", depth)

        if EPISODE_META_CLASS in classes and "meta" not in self._open:
            self._open["meta"] = depth
        if tag == "li" and "meta" in self._open and "date" not in self._open:
            self._start_text("date", depth)

        if EPISODE_TEXT_CLASS in classes and "item_text" not in self._open:
            self._open["item_text"] = depth
        if tag == "p" and "item_text" in self._open and self._can_capture("paragraph"):
            self._start_text("paragraph", depth)

    def handle_endtag(self, tag: str):
        if tag not in self._stack:
            return

        self._pop_to(len(self._stack) - 1 - self._stack[::-1].index(tag))

    def _close_implied(self, tag: str):
        """Close an open <li> or <p> that the starting tag ends without an end tag."""
        if tag == "li":
            index = self._find_open("li", LI_SCOPE_BOUNDARIES)
        elif tag in P_CLOSING_TAGS:
            index = self._find_open("p", P_SCOPE_BOUNDARIES)
        else:
            return

        if index is not None:
            self._pop_to(index)

    def _find_open(self, tag: str, boundaries: frozenset) -> Optional[int]:
        """Index of the innermost open ``tag``, or None if a boundary comes first."""
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index] == tag:
                return index
            if self._stack[index] in boundaries:
                return None
        return None

    def _pop_to(self, index: int):
        """Close the element at ``index`` and everything opened inside it."""
        while len(self._stack) > index:
            self._stack.pop()
            self._close_depth(len(self._stack))

    def handle_data(self, data: str):
        for name in TEXT_MARKERS:
            if name in self._open:
                self._text[name].append(data)

    def close(self):
        super().close()
        while self._stack:
            self._stack.pop()
            self._close_depth(len(self._stack))
        if self._awaiting_sibling_depth is not None:
            self._awaiting_sibling_depth = None
            self._warn_missing_container()

    def _can_capture(self, name: str) -> bool:
        return name not in self._open and name not in self._item_captured

    def _start_text(self, name: str, depth: int):
        self._open[name] = depth
        self._text[name] = []

    def _finish_text(self, name: str) -> str:
        text = "".join(self._text[name])
        if name in VERBATIM_MARKERS:
            return text
        return collapse_whitespace(text)

    def _close_depth(self, depth: int):
        """Close every marker opened by the element at ``depth``."""
        # The heading's parent closed before any sibling appeared
        if self._awaiting_sibling_depth is not None and depth < self._awaiting_sibling_depth:
            self._awaiting_sibling_depth = None
            self._warn_missing_container()

        closing = [name for name, opened_at in self._open.items() if opened_at == depth]
        for name in closing:
            if self._open.pop(name, None) is None:
                continue
            self._on_marker_closed(name, depth)

    def _on_marker_closed(self, name: str, depth: int):
        if name == "season_link":
            self._heading_season_label = self._finish_text(name)

        elif name == "heading":
            if self._heading_season_label is not None:
                self._season_label = self._heading_season_label
                self._season_number = parse_season_number(self._season_label)
                self.season_count += 1
                self._awaiting_sibling_depth = depth
            self._heading_season_label = None

        elif name == "container":
            self._reset_item()

        elif self._item is not None:
            item = self._item
            try:
                self._on_item_marker_closed(name)
            except Exception as e:
                print(f"Error extracting episode data ({item.episode_label or item.title.strip()}): {e}", file=sys.stderr)
                self._reset_item()

    def _on_item_marker_closed(self, name: str):
        if name == "label":
            self._item.episode_label = self._finish_text(name)
            self._item_captured.add(name)
        elif name == "title":
            self._item.title = self._finish_text(name)
            self._item_captured.add(name)
        elif name == "date":
            self._item.date_candidates.append(self._finish_text(name))
        elif name == "paragraph":
            self._item.description = self._finish_text(name)
            self._item_captured.add(name)
        elif name == "item":
            self._completed.append(self._item)
            self._reset_item()

    def _reset_item(self):
        self._item = None
        self._item_captured = set()
        for name in ("item", "label", "item_heading", "title", "meta", "date", "item_text", "paragraph"):
            self._open.pop(name, None)

    def _warn_missing_container(self):
        print(
            f"Warning: No episode list found for Season {self._season_number}",
            file=sys.stderr,
        )


def iter_raw_episodes(html: str, chunk_size: int = PARSER_CHUNK_SIZE) -> Iterator[RawEpisodeFields]:
    """
    Lazily extract raw episode fields from the listing page.

    The document is fed to the parser in chunks and episodes are yielded as
    soon as their markup closes, in document order.

    Args:
        html: Raw HTML content
        chunk_size: Number of characters fed to the parser at a time

    Yields:
        RawEpisodeFields for each episode item, grouped by season
    """
    parser = EpisodeListHTMLParser()

    for start in range(0, len(html), chunk_size):
        parser.feed(html[start:start + chunk_size])
        yield from parser.drain()

    parser.close()
    yield from parser.drain()


def normalize_episode(raw: RawEpisodeFields) -> Optional[EpisodeModel]:
    """
    Turn raw episode fields into a validated episode.

    Args:
        raw: Fields extracted from one episode item

    Returns:
        EpisodeModel, or None if the episode has no title
    """
    title = raw.title.strip()
    if not title:
        print(
            f"Warning: Skipping episode with missing title in season {raw.season_number}",
            file=sys.stderr,
        )
        return None

    description = raw.description.strip()

    return EpisodeModel(
        season_number=raw.season_number,
        episode_number=parse_episode_number(raw.episode_label),
        title=title,
        air_date=find_air_date(raw.date_candidates),
        description=description,
        tags=classify(title, description),
    )


def normalize_episodes(raw_episodes: Iterable[RawEpisodeFields]) -> list[EpisodeModel]:
    """
    Normalize raw episodes in order.

    An episode that fails to normalize is reported and skipped.
    """
    episodes: list[EpisodeModel] = []

    for raw in raw_episodes:
        try:
            episode = normalize_episode(raw)
        except Exception as e:
            print(f"Error extracting episode data ({raw.episode_label or raw.title.strip()}): {e}", file=sys.stderr)
            continue

        if episode:
            episodes.append(episode)

    return episodes


def parse_episodes_html(html: str) -> list[EpisodeModel]:
    """
    Parse the listing page HTML into episodes.

    Args:
        html: Raw HTML content

    Returns:
        Episodes in document order
    """
    return normalize_episodes(iter_raw_episodes(html))


class EpisodeScraper:
    """Fetch, extract and (optionally) YouTube-enhance the Hot Ones episode list."""

    def __init__(
        self,
        url: str = TVDB_SERIES_URL,
        feed_url: str = YOUTUBE_FEED_URL,
        enhance: bool = True,
        timeout: float = PAGE_FETCH_TIMEOUT_SECONDS,
        on_state_change: Optional[Callable[[ScrapeState], None]] = None,
    ):
        self.url = url
        self.feed_url = feed_url
        self.enhance = enhance
        self.timeout = timeout
        self.on_state_change = on_state_change
        self.state = ScrapeState.IDLE

    def _set_state(self, state: ScrapeState):
        self.state = state
        if self.on_state_change:
            self.on_state_change(state)

    async def fetch_page(self, session: aiohttp.ClientSession) -> str:
        """
        Fetch the listing page once, with no retries.

        Raises:
            FetchError: On a non-2xx status, network error or timeout
        """
        self._set_state(ScrapeState.FETCHING)
        print(f"[Scrape] Fetching {self.url}", file=sys.stderr)

        try:
            async with session.get(
                self.url,
                headers=REQUEST_HEADERS,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(f"Failed to fetch {self.url}: HTTP {response.status} {response.reason or ''}".rstrip())
                html = await response.text()
        except FetchError:
            self._set_state(ScrapeState.FAILED)
            raise
        except asyncio.TimeoutError as e:
            self._set_state(ScrapeState.FAILED)
            raise FetchError(f"Timed out after {self.timeout}s fetching {self.url}") from e
        except aiohttp.ClientError as e:
            self._set_state(ScrapeState.FAILED)
            raise FetchError(f"Failed to fetch {self.url}: {e}") from e

        print(f"[Scrape] Page fetched ({len(html)} characters)", file=sys.stderr)
        return html

    def extract(self, html: str) -> list[EpisodeModel]:
        """
        Run the extraction and normalization stages over a fetched page.

        The parser runs up to the first completed episode while PARSING; the
        rest of the document is parsed lazily while EXTRACTING.
        """
        self._set_state(ScrapeState.PARSING)
        raw_episodes = iter_raw_episodes(html)
        first = next(raw_episodes, None)

        self._set_state(ScrapeState.EXTRACTING)
        pending = raw_episodes if first is None else itertools.chain([first], raw_episodes)
        episodes = normalize_episodes(pending)

        print(f"[Scrape] Extracted {len(episodes)} episodes", file=sys.stderr)
        return episodes

    async def scrape(self, session: Optional[aiohttp.ClientSession] = None) -> list[EpisodeModel]:
        """
        Run the whole pipeline.

        Args:
            session: Optional aiohttp session to reuse (one is created otherwise)

        Returns:
            Episodes in listing order

        Raises:
            FetchError: If the listing page cannot be fetched; no episodes are returned
        """
        if session is None:
            async with aiohttp.ClientSession() as own_session:
                return await self._run(own_session)
        return await self._run(session)

    async def _run(self, session: aiohttp.ClientSession) -> list[EpisodeModel]:
        html = await self.fetch_page(session)
        episodes = self.extract(html)

        if self.enhance:
            from .youtube import enhance_with_youtube

            self._set_state(ScrapeState.ENHANCING)
            episodes = await enhance_with_youtube(episodes, session, feed_url=self.feed_url)

        self._set_state(ScrapeState.DONE)
        return episodes


async def scrape_all_episodes(
    enhance: bool = True,
    session: Optional[aiohttp.ClientSession] = None,
) -> list[EpisodeModel]:
    """
    Scrape all Hot Ones episodes from TheTVDB.

    Args:
        enhance: Attach YouTube links from the channel feed
        session: Optional aiohttp session to reuse

    Returns:
        List of all scraped EpisodeModels
    """
    scraper = EpisodeScraper(enhance=enhance)
    return await scraper.scrape(session=session)
