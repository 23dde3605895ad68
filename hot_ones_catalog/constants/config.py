"""Scraper and YouTube feed configuration constants."""

# Episode listing source
TVDB_SERIES_URL = "https://thetvdb.com/series/hot-ones/allseasons/official"
PAGE_FETCH_TIMEOUT_SECONDS = 15

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
    ),
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}

# Markup shape of the listing page
SEASON_LINK_PATH = "/seasons/official/"
EPISODE_LIST_CLASS = "list-group"
EPISODE_ITEM_CLASS = "list-group-item"
EPISODE_LABEL_CLASS = "episode-label"
EPISODE_HEADING_CLASS = "list-group-item-heading"
EPISODE_META_CLASS = "list-inline"
EPISODE_TEXT_CLASS = "list-group-item-text"

# Hot Ones YouTube channel feed
YOUTUBE_FEED_URL = "https://www.youtube.com/feeds/videos.xml?channel_id=UCPD_bxCRGpmmeQcbe2kpPaA"
FEED_FETCH_TIMEOUT_SECONDS = 15
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"

SHOW_NAME = "Hot Ones"
SHOW_NAME_PREFIXES = ("hot ones", "first we feast")
TITLE_SEPARATORS = ("|", "–", "-", ":", "eats")
MATCHING_STOP_WORDS = ("the", "a", "an", "and", "or", "but", "with", "hot ones", "first we feast")
MIN_MATCHING_KEY_LENGTH = 3
SEARCH_QUERY_SUFFIX = "spicy wings"
