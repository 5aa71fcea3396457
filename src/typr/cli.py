"""CLI entry point for Typr."""

import logging
from pathlib import Path

import click


@click.group(invoke_without_command=True)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where settings and statistics are kept (default: ~/.typr or $TYPR_DATA_DIR)",
)
@click.option(
    "--words",
    "words_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("words.txt"),
    show_default=True,
    help="Word list, one word per line",
)
@click.option("--debug", is_flag=True, help="Write a debug log to typr.log in the data directory")
@click.pass_context
def main(ctx: click.Context, data_dir: Path, words_path: Path, debug: bool) -> None:
    """Typr: adaptive typing-speed trainer."""
    from typr.config.settings import Settings

    settings = Settings.load(data_dir)
    if debug:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=settings.data_dir / "typr.log",
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["words_path"] = words_path
    if ctx.invoked_subcommand is None:
        ctx.invoke(launch)


@main.command()
@click.pass_context
def launch(ctx: click.Context) -> None:
    """Open the interactive menu."""
    from typr.app.trainer import Trainer
    from typr.engine.lexicon import Lexicon
    from typr.menu.base import MenuUnavailableError
    from typr.menu.gum import GUM_URL, GumMenu, gum_available
    from typr.state.userdata import UserDataStore

    if not gum_available():
        click.echo(f"Error: 'gum' is not installed ({GUM_URL}).", err=True)
        return

    settings = ctx.obj["settings"]
    store = UserDataStore(settings.data_dir)
    lexicon = Lexicon.load(ctx.obj["words_path"], store.load())
    trainer = Trainer(menu=GumMenu(), settings=settings, store=store, lexicon=lexicon)
    try:
        trainer.run()
    except MenuUnavailableError as e:
        click.echo(f"Error: {e}", err=True)


@main.command()
@click.option("--letters", "-n", default=5, show_default=True, help="How many weak letters to list")
@click.option("--recent", "-r", "history_count", default=10, show_default=True, help="How many recent results to list")
@click.pass_context
def stats(ctx: click.Context, letters: int, history_count: int) -> None:
    """Show weakest letters and recent results."""
    from typr.state.userdata import UserDataStore

    data = UserDataStore(ctx.obj["settings"].data_dir).load()

    weakest = data.weakest_letters(letters)
    if not weakest:
        click.echo("No keystrokes recorded yet.")
    else:
        click.echo("Weakest letters:")
        for ch, s in weakest:
            speed = f"{s.wpm:.1f}" if s.wpm is not None else "-"
            click.echo(f"  {ch!r}: {s.accuracy * 100:.1f}% of {s.shown}, {speed} wpm")

    recent = data.history[-history_count:] if history_count > 0 else []
    if recent:
        click.echo("Recent results:")
        for r in reversed(recent):
            click.echo(
                f"  {r.timestamp:%Y-%m-%d %H:%M}  {r.wpm:6.2f} wpm  "
                f"{r.accuracy:6.2f}%  {r.time_taken:6.1f}s"
            )


@main.command()
@click.confirmation_option(prompt="Clear all letter statistics and history?")
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Clear all letter statistics and test history."""
    from typr.state.userdata import UserData, UserDataStore

    UserDataStore(ctx.obj["settings"].data_dir).save(UserData())
    click.echo("History cleared.")
