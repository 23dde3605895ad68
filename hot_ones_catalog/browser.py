"""Interactive text browser for scraped Hot Ones episodes."""

import random
from collections import Counter
from typing import Optional

import click

from .models.episode import EpisodeModel

SEARCH_RESULT_LIMIT = 10
RULE_WIDTH = 80

QUIT_COMMANDS = ("quit", "q", "exit")
HELP_COMMANDS = ("help", "h")
RANDOM_COMMANDS = ("random", "r")
STATS_COMMANDS = ("stats", "s")


def title_style(text: str) -> str:
    return click.style(text, fg="red", bold=True)


def highlight_style(text: str) -> str:
    return click.style(text, fg="yellow", bold=True)


def error_style(text: str) -> str:
    return click.style(text, fg="red")


def dim_style(text: str) -> str:
    return click.style(text, dim=True)


def parse_int(text: str) -> Optional[int]:
    """Parse a whole number, or None if the text is not one."""
    try:
        return int(text.strip())
    except ValueError:
        return None


class EpisodeBrowser:
    """
    Read-only command loop over an episode list.

    Episodes are addressed by their 1-based position in the list, which is
    the order they appear on the listing page.
    """

    def __init__(self, episodes: list[EpisodeModel], rng: Optional[random.Random] = None):
        self.episodes = episodes
        self.rng = rng or random.Random()

    def run(self) -> None:
        """Show the welcome message and process commands until the user quits."""
        self.show_help()

        while True:
            try:
                line = click.prompt(
                    "Enter command or episode number",
                    default="",
                    show_default=False,
                )
            except click.Abort:
                click.echo()
                break

            if not self.handle_command(line):
                break

    def handle_command(self, line: str) -> bool:
        """
        Execute one command.

        Returns:
            False if the user asked to quit, True otherwise
        """
        command = line.strip()
        lower = command.lower()

        if lower in QUIT_COMMANDS:
            click.echo("\nThanks for stopping by! Stay spicy!")
            return False

        if lower in HELP_COMMANDS:
            self.show_help()
        elif lower in RANDOM_COMMANDS:
            self.show_random_episode()
        elif lower in STATS_COMMANDS:
            self.show_stats()
        elif lower.startswith("search "):
            self.search(command[len("search "):].strip())
        elif lower.startswith("season "):
            season_number = parse_int(command[len("season "):])
            if season_number is None:
                click.echo(error_style("Invalid season number. Please enter a valid number."))
            else:
                self.list_season(season_number)
        elif lower.startswith("open "):
            self.open_episode(command[len("open "):])
        else:
            number = parse_int(command)
            if number is None:
                click.echo(error_style('Invalid input. Type "help" for available commands.'))
            elif self._in_range(number):
                self.show_episode(number)
            else:
                click.echo(error_style(f"Episode number must be between 1 and {len(self.episodes)}"))

        return True

    def _in_range(self, number: int) -> bool:
        return 1 <= number <= len(self.episodes)

    def show_help(self) -> None:
        click.echo(title_style("Welcome to the (Unofficial) Hot Ones episode browser!"))
        click.echo(f"{len(self.episodes)} episodes available (1-{len(self.episodes)})")
        click.echo("\nCommands:")
        click.echo(f"  {highlight_style('<number>')}        - Show episode details")
        click.echo(f"  {highlight_style('random')} or {highlight_style('r')}     - Show a random episode")
        click.echo(f"  {highlight_style('stats')} or {highlight_style('s')}      - Show episode statistics")
        click.echo(f"  {highlight_style('search <term>')}   - Search episodes by title or description")
        click.echo(f"  {highlight_style('season <number>')} - List all episodes from a season")
        click.echo(f"  {highlight_style('open <number>')}   - Open the episode on YouTube")
        click.echo(f"  {highlight_style('help')} or {highlight_style('h')}       - Show this help message")
        click.echo(f"  {highlight_style('quit')} or {highlight_style('q')}       - Exit the browser")
        click.echo("\n" + "=" * 60 + "\n")

    def show_episode(self, number: int) -> None:
        """Print the details of the episode at a 1-based position."""
        episode = self.episodes[number - 1]

        click.echo("\n" + "=" * RULE_WIDTH)
        click.echo(title_style(f"{number}. {episode.title}"))
        click.echo(f"   Season {episode.season_number}, Episode {episode.episode_number}")
        click.echo(f"   Air Date: {episode.air_date or 'Unknown'}")
        click.echo(f"   Categories: {', '.join(tag.category for tag in episode.tags)}")
        sub_categories = [sub for tag in episode.tags for sub in tag.sub_categories]
        if sub_categories:
            click.echo(f"   Sub-categories: {', '.join(sub_categories)}")
        if episode.description:
            click.echo(f"   Description: {episode.description}")

        if episode.video_url:
            click.echo(f"   YouTube: {highlight_style(episode.video_url)}")
            if episode.video_view_count is not None:
                click.echo(f"   Views: {episode.video_view_count:,}")
            if episode.video_published_date:
                click.echo(f"   Published: {episode.video_published_date}")
        elif episode.video_search_url:
            click.echo(f"   Search YouTube: {dim_style(episode.video_search_url)}")

        click.echo("=" * RULE_WIDTH + "\n")

    def show_random_episode(self) -> None:
        if not self.episodes:
            click.echo(error_style("No episodes available."))
            return
        self.show_episode(self.rng.randint(1, len(self.episodes)))

    def show_stats(self) -> None:
        season_counts = Counter(episode.season_number for episode in self.episodes)
        category_counts = Counter(tag.category for episode in self.episodes for tag in episode.tags)

        click.echo(title_style("\nHot Ones Episode Statistics:"))
        click.echo(f"Total Episodes: {len(self.episodes)}")
        click.echo(f"Total Seasons: {len(season_counts)}")

        click.echo("\nEpisodes per Season:")
        for season_number in sorted(season_counts):
            click.echo(f"  Season {season_number}: {season_counts[season_number]} episodes")

        click.echo("\nCategory Distribution:")
        for category, count in category_counts.most_common():
            click.echo(f"  {category}: {count} episodes")
        click.echo("")

    def search(self, term: str) -> None:
        """List episodes whose title or description contains the term."""
        if not term:
            click.echo(error_style("Please enter a search term."))
            return

        needle = term.lower()
        results = [
            (number, episode)
            for number, episode in enumerate(self.episodes, start=1)
            if needle in episode.title.lower() or needle in episode.description.lower()
        ]

        click.echo(f'\nSearch results for "{term}" ({len(results)} found):')
        if not results:
            click.echo("No episodes found matching your search term.")
        else:
            for number, episode in results[:SEARCH_RESULT_LIMIT]:
                click.echo(f"  {number}. {episode.title} (S{episode.season_number}E{episode.episode_number})")
            if len(results) > SEARCH_RESULT_LIMIT:
                click.echo(f"  ... and {len(results) - SEARCH_RESULT_LIMIT} more results")
        click.echo("")

    def list_season(self, season_number: int) -> None:
        season_episodes = [
            (number, episode)
            for number, episode in enumerate(self.episodes, start=1)
            if episode.season_number == season_number
        ]

        click.echo(f"\nSeason {season_number} Episodes ({len(season_episodes)} episodes):")
        if not season_episodes:
            click.echo(f"No episodes found for Season {season_number}.")
        else:
            for number, episode in season_episodes:
                click.echo(f"  {number}. {episode.title} ({episode.air_date or 'Unknown'})")
        click.echo("")

    def open_episode(self, argument: str) -> None:
        """Open an episode's video (or YouTube search) in the web browser."""
        number = parse_int(argument)
        if number is None or not self._in_range(number):
            click.echo(error_style(f"Episode number must be between 1 and {len(self.episodes)}"))
            return

        url = self.episodes[number - 1].watch_url
        if not url:
            click.echo(error_style("No YouTube link available for this episode."))
            return

        click.echo(f"Opening {url}")
        click.launch(url)
