"""CLI interface for git-year."""

import json
import sys
from datetime import date
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from shared.cli import create_table, error, handle_errors, info, print_table, success
from shared.logger import setup_logger

from .aggregator import GitYearStats
from .fetcher import RequestFailed
from .models import QueryParams, Snapshot

console = Console()


def display_profile(snapshot: Snapshot, year: int) -> None:
    """Display the profile header."""
    profile = snapshot.profile

    title = f"[bold cyan]{profile.name or profile.login}[/bold cyan] [dim]@{profile.login}[/dim]"
    if profile.bio:
        title += f"\n[dim]{profile.bio}[/dim]"
    if profile.location:
        title += f"\n📍 {profile.location}"
    title += f"\n👥 {profile.followers:,} followers · {profile.following:,} following"

    console.print(Panel(title, title=f"GitHub {year}"))


def display_counts(snapshot: Snapshot) -> None:
    """Display activity counts with their share of the total."""
    console.print("\n[bold yellow]📊 Activity:[/bold yellow]")

    table = create_table(title=None)
    table.add_column("Category", style="bold")
    table.add_column("Count", justify="right", style="yellow")
    table.add_column("Share", justify="right", style="dim")

    for item in snapshot.breakdown():
        table.add_row(item.label, f"{item.value:,}", f"{item.percent}%")

    table.add_row("[bold]Total[/bold]", f"[bold]{snapshot.counts.total:,}[/bold]", "")
    print_table(table)

    console.print(f"  📦 Active repositories: [bold]{snapshot.counts.repo_active_count}[/bold]")


def display_languages(snapshot: Snapshot) -> None:
    """Display language distribution across active repositories."""
    console.print("\n[bold yellow]💻 Languages:[/bold yellow]")

    if not snapshot.languages:
        info("No language data for active repositories")
        return

    top = snapshot.languages[0].count

    table = create_table(title=None)
    table.add_column("Language", style="bold cyan")
    table.add_column("Repos", justify="right", style="yellow")
    table.add_column("Visual", width=30)

    for lang in snapshot.languages:
        bar_length = int(lang.count / top * 25) if top > 0 else 0
        bar = "█" * bar_length + "░" * (25 - bar_length)
        table.add_row(lang.name, str(lang.count), bar)

    print_table(table)


def display_top_repositories(snapshot: Snapshot) -> None:
    """Display the most starred repositories."""
    console.print("\n[bold yellow]🏆 Top Repositories:[/bold yellow]")

    if not snapshot.top_repositories:
        info("No repositories found")
        return

    table = create_table(title=None)
    table.add_column("#", justify="right", style="cyan", width=4)
    table.add_column("Repository", style="bold")
    table.add_column("Stars", justify="right", style="yellow")
    table.add_column("Language", style="dim")
    table.add_column("Description", style="dim", no_wrap=False)

    for idx, repo in enumerate(snapshot.top_repositories, 1):
        table.add_row(
            str(idx),
            repo.name,
            f"{repo.stars:,}",
            repo.language or "N/A",
            (repo.description or "")[:60],
        )

    print_table(table)


@click.command()
@click.argument("username")
@click.option(
    "--year",
    "-y",
    type=int,
    default=lambda: date.today().year,
    show_default="current year",
    help="Year to summarize",
)
@click.option("--token", help="GitHub personal access token (or set GITHUB_TOKEN env var)")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["rich", "json"], case_sensitive=False),
    default="rich",
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    username: str,
    year: int,
    token: Optional[str],
    output: str,
    verbose: bool,
):
    """
    git-year - Summarize a GitHub user's activity for one year.

    Examples:

        \b
        # Current year
        git-year torvalds

        \b
        # A past year, authenticated
        git-year octocat --year 2023 --token ghp_xxx

        \b
        # JSON output
        git-year vercel --output json
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger("gityear", level=log_level)

    try:
        params = QueryParams(username=username, year=year, token=token)
    except ValueError as e:
        error(str(e))
        sys.exit(1)

    stats = GitYearStats()

    try:
        if output == "json":
            snapshot = stats.fetch(params)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
            ) as progress:
                task = progress.add_task(f"Fetching {year} activity for {username}...", total=None)
                snapshot = stats.fetch(params)
                progress.update(task, completed=True)
    except RequestFailed as e:
        error(f"Failed to fetch {username}")
        error(f"Error: {e}")
        sys.exit(1)

    if output == "json":
        data = {"year": year, **snapshot.to_dict()}
        print(json.dumps(data, indent=2))
        sys.exit(0)

    display_profile(snapshot, year)
    display_counts(snapshot)
    display_languages(snapshot)
    display_top_repositories(snapshot)

    console.print(f"\n[dim]{snapshot.share_text(year)}[/dim]\n")
    success("Fetch completed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
