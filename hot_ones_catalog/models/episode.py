"""Episode models for scraped Hot Ones episode data."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..constants.taxonomy import UNCATEGORIZED_CATEGORY, UNCATEGORIZED_SUB_CATEGORY


class EpisodeTag(BaseModel):
    """A profession category with its matched sub-categories."""

    category: str = Field(..., description="Profession category, e.g. 'Comedy'")
    sub_categories: List[str] = Field(
        default_factory=list,
        description="Unique sub-category labels in taxonomy order"
    )


class RawEpisodeFields(BaseModel):
    """Episode fields exactly as found in the listing page markup."""

    season_number: int = Field(default=0, description="Season number parsed from the section header (0 if unknown)")
    season_label: str = Field(default="", description="Season header text")
    episode_label: str = Field(default="", description="Episode label text, e.g. 'S01E01'")
    title: str = Field(default="", description="Episode title text")
    date_candidates: List[str] = Field(
        default_factory=list,
        description="Inline metadata texts that may hold the air date"
    )
    description: str = Field(default="", description="First paragraph of the episode text")


class EpisodeModel(BaseModel):
    """Pydantic model for a Hot Ones episode scraped from TheTVDB."""

    season_number: int = Field(..., ge=0, description="Season number (0 if unparseable)")
    episode_number: int = Field(..., ge=0, description="Episode number within the season (0 if unparseable)")
    title: str = Field(..., min_length=1, description="Episode title")
    air_date: str = Field(default="", description="Air date as YYYY-MM-DD, or the source text if unparseable")
    description: str = Field(default="", description="Episode description")
    tags: List[EpisodeTag] = Field(..., min_length=1, description="Profession tags")

    # YouTube data from the channel feed
    video_url: Optional[str] = Field(default=None, description="Direct YouTube video URL")
    video_id: Optional[str] = Field(default=None, description="YouTube video ID")
    video_view_count: Optional[int] = Field(default=None, ge=0, description="YouTube view count")
    video_published_date: Optional[str] = Field(default=None, description="YouTube publish date (YYYY-MM-DD)")
    # Fallback when no direct link was matched
    video_search_url: Optional[str] = Field(default=None, description="YouTube search URL for the episode")

    @property
    def is_uncategorized(self) -> bool:
        """True when the episode only carries the Other/Unknown fallback tag."""
        return (
            len(self.tags) == 1
            and self.tags[0].category == UNCATEGORIZED_CATEGORY
            and UNCATEGORIZED_SUB_CATEGORY in self.tags[0].sub_categories
        )

    @property
    def watch_url(self) -> Optional[str]:
        """Direct video link if known, otherwise the search URL."""
        return self.video_url or self.video_search_url


class DataQualityReport(BaseModel):
    """Counts of missing or degraded fields across a scrape run."""

    total_episodes: int = Field(default=0, description="Number of episodes checked")
    missing_titles: int = Field(default=0)
    missing_air_dates: int = Field(default=0)
    missing_descriptions: int = Field(default=0)
    uncategorized: int = Field(default=0, description="Episodes tagged only Other/Unknown")
    with_video_links: int = Field(default=0, description="Episodes matched to a YouTube video")
    with_search_urls: int = Field(default=0, description="Episodes with only a YouTube search URL")
