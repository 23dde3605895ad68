"""CLI entry point for scraping and browsing Hot Ones episodes."""

import asyncio
import sys
from pathlib import Path

import click

from .constants.paths import CACHE_PATH
from .models.episode import EpisodeModel


@click.group()
def cli():
    """Hot Ones Catalog - Episode scraping and browsing CLI."""
    pass


def run_scrape(enhance: bool) -> list[EpisodeModel]:
    """Run the scrape pipeline, exiting with status 1 on a fatal error."""
    from .scrapers.episodes import ScrapeError, scrape_all_episodes

    try:
        return asyncio.run(scrape_all_episodes(enhance=enhance))
    except ScrapeError as e:
        click.echo(f"Error scraping Hot Ones episodes: {e}", err=True)
        sys.exit(1)


def echo_data_quality(episodes: list[EpisodeModel]) -> None:
    from .utils.episodes import summarize_data_quality

    report = summarize_data_quality(episodes)
    click.echo("\nData Quality Check:")
    click.echo(f"Missing titles: {report.missing_titles}")
    click.echo(f"Missing air dates: {report.missing_air_dates}")
    click.echo(f"Missing descriptions: {report.missing_descriptions}")
    click.echo(f"Uncategorized episodes: {report.uncategorized}")
    click.echo(f"Direct YouTube links: {report.with_video_links}")
    click.echo(f"YouTube search links: {report.with_search_urls}")


@cli.command("scrape")
@click.option(
    "--output", "-o",
    default=str(CACHE_PATH),
    type=click.Path(dir_okay=False),
    help=f"Where to write the episode JSON (default: {CACHE_PATH})"
)
@click.option(
    "--no-youtube",
    is_flag=True,
    help="Skip matching episodes against the YouTube channel feed"
)
def scrape(output: str, no_youtube: bool):
    """Scrape all episodes from TheTVDB and cache them as JSON.

    Fetches the all-seasons listing, tags each guest by profession and
    attaches YouTube links (or search links) from the channel feed.

    Examples:

        hotones scrape

        hotones scrape --output episodes.json --no-youtube
    """
    from .utils.episodes import save_episodes

    click.echo("Starting Hot Ones episode scraper...")
    episodes = run_scrape(enhance=not no_youtube)

    if not episodes:
        click.echo("Error: No episodes found. The listing page layout may have changed.", err=True)
        sys.exit(1)

    output_path = save_episodes(episodes, Path(output))
    click.echo(f"\nSaved {len(episodes)} episodes to {output_path}")

    echo_data_quality(episodes)

    click.echo("\nScraping completed successfully")


@cli.command("browse")
@click.option(
    "--cache",
    default=str(CACHE_PATH),
    type=click.Path(dir_okay=False),
    help=f"Episode JSON cache to load or create (default: {CACHE_PATH})"
)
@click.option(
    "--refresh",
    is_flag=True,
    help="Ignore the cache and scrape fresh data"
)
@click.option(
    "--no-youtube",
    is_flag=True,
    help="Skip YouTube matching when a scrape is needed"
)
def browse(cache: str, refresh: bool, no_youtube: bool):
    """Browse episodes interactively.

    Loads episodes from the cache, scraping (and caching) them first when
    the cache is missing or unreadable.

    Examples:

        hotones browse

        hotones browse --refresh
    """
    from .browser import EpisodeBrowser
    from .utils.episodes import load_cached_episodes, save_episodes

    cache_path = Path(cache)
    episodes = None if refresh else load_cached_episodes(cache_path)

    if episodes is not None:
        click.echo(f"Loaded {len(episodes)} episodes from {cache_path}")
    else:
        click.echo("No usable cache found, scraping episodes...")
        episodes = run_scrape(enhance=not no_youtube)
        save_episodes(episodes, cache_path)
        click.echo(f"Episodes cached to {cache_path}\n")

    if not episodes:
        click.echo("Error: No episodes available.", err=True)
        sys.exit(1)

    EpisodeBrowser(episodes).run()
