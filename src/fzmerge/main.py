from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.text import Text

from fzmerge.core.config import FuzzyConfig, load_config
from fzmerge.core.registry import normalize
from fzmerge.core.session import FuzzySession
from fzmerge.domain.errors import ConfigError
from fzmerge.domain.types import InputState
from fzmerge.logger import get_logger, setup_logger
from fzmerge.providers import load_providers

load_dotenv()

console = Console()

cli = typer.Typer(
    name="fzmerge",
    help="Fuzzy, ranked completion over several completion providers",
    epilog="""
    Examples:
    $ fzmerge complete "rea" --providers providers.json --sorting score
    $ fzmerge providers providers.json
    $ fzmerge tui --providers providers.json
    """,
    add_completion=False,
)


def _load(config_file: Optional[Path], providers_file: Path) -> tuple[FuzzyConfig, dict, Optional[list]]:
    try:
        config = load_config(config_file)
        providers, registry = load_providers(providers_file)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    return config, providers, registry


def _highlight(candidate: str, positions: list[int]) -> Text:
    text = Text(candidate)
    for index in positions:
        text.stylize("bold magenta", index, index + 1)
    return text


@cli.command()
def complete(
    text: str = typer.Argument(..., help="Input text; the cursor is at its end"),
    providers_file: Path = typer.Option(Path("providers.json"), "--providers", "-p", help="Providers JSON file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="fzmerge configuration JSON"),
    sorting: Optional[str] = typer.Option(None, "--sorting", "-s", help="none, alphabetic or score"),
    scorer: Optional[str] = typer.Option(None, "--scorer", help="Scoring function for --sorting score"),
    prefix_on_top: Optional[bool] = typer.Option(None, "--prefix-on-top/--no-prefix-on-top"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows to print"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Run one completion cycle for TEXT and print the ranked candidates."""
    setup_logger(log_level="DEBUG" if debug else "INFO", console_output=debug)
    logger = get_logger("main")

    config, providers, registry = _load(config_file, providers_file)
    updates = {
        key: value
        for key, value in {
            "sorting_backend": sorting,
            "scoring_function": scorer,
            "prefix_on_top": prefix_on_top,
            "providers": registry if registry and not config.providers else None,
        }.items()
        if value is not None
    }
    if updates:
        config = FuzzyConfig(**{**config.model_dump(), **updates})

    state = InputState.at_end(text)
    with FuzzySession(providers, config) as session:
        ranked = session.complete(state)
        logger.info(f"{len(ranked)} candidates for {text!r}")

        table = Table(title=f"Completions for {session.prefix(state)!r}")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Candidate")
        table.add_column("Provider", style="cyan")
        table.add_column("Annotation", style="green")
        for rank, candidate in enumerate(ranked[:limit], start=1):
            table.add_row(
                str(rank),
                _highlight(candidate, session.match_positions(candidate)),
                session.owner(candidate) or "",
                session.annotation(candidate) or "",
            )
        console.print(table)
        if len(ranked) > limit:
            console.print(f"[dim]... {len(ranked) - limit} more[/dim]")


@cli.command()
def providers(
    providers_file: Path = typer.Argument(Path("providers.json"), help="Providers JSON file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="fzmerge configuration JSON"),
):
    """Print the normalized provider registry."""
    config, loaded, registry = _load(config_file, providers_file)
    entries = config.providers or registry or list(loaded)
    for index, provider_id in enumerate(normalize(entries), start=1):
        provider = loaded.get(provider_id)
        kind = getattr(provider, "kind", None)
        status = kind.value if kind is not None else "[red]not defined[/red]"
        console.print(f"{index:>2}. [cyan]{provider_id}[/cyan] ({status})")


@cli.command()
def tui(
    providers_file: Path = typer.Option(Path("providers.json"), "--providers", "-p", help="Providers JSON file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="fzmerge configuration JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Open an input line with live fuzzy completion."""
    from fzmerge.presentation.tui import FuzzyApp

    setup_logger(log_level="DEBUG" if debug else "INFO")
    config, loaded, registry = _load(config_file, providers_file)
    if registry and not config.providers:
        config = FuzzyConfig(**{**config.model_dump(), "providers": registry})
    with FuzzySession(loaded, config) as session:
        FuzzyApp(session).run()


def run():
    """Entry point for the fzmerge CLI."""
    cli()


if __name__ == "__main__":
    run()
