"""Pydantic models for YouTube channel feed data."""

from pydantic import BaseModel, Field


class VideoFeedEntry(BaseModel):
    """A single video from the Hot Ones YouTube channel feed."""

    title: str = Field(description="Video title as published")
    url: str = Field(description="Watch URL")
    video_id: str = Field(default="", description="YouTube video ID")
    published_date: str = Field(default="", description="Publish date (YYYY-MM-DD)")
    description: str = Field(default="", description="Video description")
    view_count: int = Field(default=0, ge=0, description="View count from media statistics")
