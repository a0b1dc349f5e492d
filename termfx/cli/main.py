"""Command line interface for termfx.

Each effect is exposed as a subcommand. Effects draw on stdout; logging
goes to stderr.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import click
from rich.console import Console
from rich.table import Table

from termfx.cancellation import CancellationToken, EffectOutcome, cancel_on_interrupt
from termfx.colors import CYAN, GREEN, MAGENTA, YELLOW, gradient, hue_cycle, parse_color
from termfx.config.config import init_config
from termfx.effects import EffectEngine, SpinnerStyle
from termfx.exceptions import ConfigurationError, InvalidArgumentError
from termfx.formatting import box_text, center_text
from termfx.models import (
    Color,
    Config,
    DecodeSchedule,
    EffectSettings,
    LogLevel,
    WiggleMode,
)
from termfx.random_source import RandomSource
from termfx.styles.banners import Position, create_banner
from termfx.utils.logging_config import (
    get_logger,
    log_exception,
    set_correlation_id,
    setup_logging,
)

logger = get_logger(__name__)

# Exit status for a run interrupted by SIGINT
EXIT_INTERRUPTED = 130

# Number of -v flags -> log level
VERBOSITY_LEVELS: dict[int, LogLevel] = {
    1: LogLevel.INFO,
    2: LogLevel.DEBUG,
}


class ColorParamType(click.ParamType):
    """Click parameter accepting a color name, ``#rrggbb`` or ``r,g,b``."""

    name = "color"

    def convert(self, value: Any, param: Any, ctx: Any) -> Color:
        """Parse the option value, reporting bad colors as usage errors."""
        if isinstance(value, Color):
            return value
        try:
            return parse_color(value)
        except InvalidArgumentError as e:
            self.fail(e.message, param, ctx)


COLOR = ColorParamType()


def _get_config(ctx: click.Context) -> Config:
    return ctx.obj["config"]


def _settings(ctx: click.Context, **overrides: Any) -> EffectSettings:
    """Merge CLI overrides onto the configured effect defaults."""
    data = _get_config(ctx).effects.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return EffectSettings(**data)


def _engine(ctx: click.Context, seed: int | None = None) -> EffectEngine:
    return EffectEngine.from_config(_get_config(ctx), rng=RandomSource(seed))


def _run_effect(ctx: click.Context, effect: Callable[..., EffectOutcome], *args: Any, **kwargs: Any) -> None:
    """Run an effect with Ctrl-C mapped to cancellation.

    Each run gets its own correlation ID when correlation IDs are enabled.
    """
    if _get_config(ctx).observability.log_correlation_id:
        set_correlation_id()
    token = CancellationToken()
    try:
        with cancel_on_interrupt(token):
            outcome = effect(*args, cancel=token, **kwargs)
    except InvalidArgumentError as e:
        log_exception(logger, e, f"Rejected arguments for {effect.__name__}")
        raise click.ClickException(str(e)) from None
    if outcome == EffectOutcome.CANCELLED:
        ctx.exit(EXIT_INTERRUPTED)


_EFFECT_OPTIONS = (
    click.option("--delay", type=click.IntRange(min=0), help="Delay between frames (ms)"),
    click.option("--iterations", type=click.IntRange(min=0), help="Repeat count for cyclic effects"),
    click.option("--width", type=click.IntRange(min=1), help="Bar width / slide span"),
    click.option("--color", type=COLOR, help="Text color (name, #rrggbb or r,g,b)"),
)


def effect_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the shared --delay/--iterations/--width/--color options."""
    for option in reversed(_EFFECT_OPTIONS):
        func = option(func)
    return func


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.pass_context
def cli(ctx, config, verbose):
    """termfx - terminal text effects."""
    ctx.ensure_object(dict)
    try:
        config_manager = init_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from None

    cfg = config_manager.config
    level = VERBOSITY_LEVELS.get(min(verbose, 2))
    if level is not None:
        cfg = cfg.model_copy(
            update={"observability": cfg.observability.model_copy(update={"log_level": level})}
        )
        setup_logging(cfg.observability)

    ctx.obj["config"] = cfg
    ctx.obj["verbosity"] = verbose
    logger.debug("Loaded configuration from %s", config_manager.config_file or "defaults")


@cli.command()
@click.argument("text")
@effect_options
@click.pass_context
def typewriter(ctx, text, delay, iterations, width, color):
    """Type TEXT one character at a time."""
    engine = _engine(ctx)
    _run_effect(ctx, engine.typewriter, text, _settings(ctx, delay=delay, iterations=iterations, width=width), color)
    engine.terminal.write("\n")


@cli.command("loading-bar")
@click.option("--total", type=int, default=20, show_default=True, help="Number of steps")
@effect_options
@click.pass_context
def loading_bar(ctx, total, delay, iterations, width, color):
    """Fill a loading bar over TOTAL steps."""
    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    _run_effect(ctx, _engine(ctx).loading_bar, total, settings, color)


@cli.command()
@click.option("--total", type=int, default=20, show_default=True, help="Number of frames")
@click.option("--style", default="classic", show_default=True, help="Spinner style name or index")
@click.option("--message", default="", help="Text shown after the counter")
@effect_options
@click.pass_context
def spinner(ctx, total, style, message, delay, iterations, width, color):
    """Spin a progress spinner for TOTAL frames."""
    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    _run_effect(ctx, _engine(ctx).progress_spinner, total, settings, color, style, message)


@cli.command()
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in WiggleMode]),
    default=WiggleMode.BASELINE.value,
    show_default=True,
    help="Raise characters or change their case",
)
@effect_options
@click.pass_context
def wiggle(ctx, text, mode, delay, iterations, width, color):
    """Run a wave along TEXT."""
    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    _run_effect(ctx, _engine(ctx).wiggle, text, settings, color, mode)


@cli.command()
@click.argument("text")
@click.option(
    "--schedule",
    type=click.Choice([s.value for s in DecodeSchedule]),
    default=DecodeSchedule.LEFT_TO_RIGHT.value,
    show_default=True,
    help="Order in which characters settle",
)
@click.option("--seed", type=int, help="Seed for repeatable output")
@effect_options
@click.pass_context
def matrix(ctx, text, schedule, seed, delay, iterations, width, color):
    """Decode TEXT out of random symbols."""
    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    _run_effect(ctx, _engine(ctx, seed).matrix_decode, text, settings, color, schedule)


@cli.command()
@click.argument("text")
@click.option("--from-color", type=COLOR, help="Gradient start color")
@click.option("--to-color", type=COLOR, help="Gradient end color")
@click.option("--steps", type=int, help="Palette size (gradient steps or hue cycle length)")
@effect_options
@click.pass_context
def rainbow(ctx, text, from_color, to_color, steps, delay, iterations, width, color):
    """Cycle TEXT through a rainbow or a two-color gradient.

    --color is accepted for symmetry with the other effects and ignored.
    """
    if (from_color is None) != (to_color is None):
        msg = "--from-color and --to-color must be given together"
        raise click.UsageError(msg)

    try:
        if from_color is not None:
            palette = gradient(from_color, to_color, steps if steps is not None else 7)
        elif steps is not None:
            palette = hue_cycle(steps)
        else:
            palette = None
    except InvalidArgumentError as e:
        raise click.ClickException(str(e)) from None

    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    _run_effect(ctx, _engine(ctx).rainbow_text, text, settings, palette)


@cli.command("slide-in")
@click.argument("text")
@click.option("--terminal-edge", is_flag=True, help="Start from the terminal's right edge")
@effect_options
@click.pass_context
def slide_in(ctx, text, terminal_edge, delay, iterations, width, color):
    """Slide TEXT in from the right."""
    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    _run_effect(ctx, _engine(ctx).slide_in, text, settings, color, terminal_edge)


@cli.command()
@click.argument("text")
def box(text):
    """Draw a box around TEXT."""
    click.echo(box_text(text))


@cli.command()
@click.argument("text")
@click.option("--width", type=click.IntRange(min=1), help="Width to center within")
def center(text, width):
    """Center TEXT in the terminal."""
    click.echo(center_text(text, width))


@cli.command()
@click.argument("art_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("text")
@click.option("--padding", type=click.IntRange(min=0), default=2, show_default=True)
@click.option(
    "--position",
    type=click.Choice([p.value for p in Position]),
    default=Position.MIDDLE.value,
    show_default=True,
)
@click.option("--width", type=click.IntRange(min=1), help="Width to center the text within")
def banner(art_file, text, padding, position, width):
    """Show the ASCII art in ART_FILE with TEXT beside it."""
    art = Path(art_file).read_text(encoding="utf-8")
    click.echo(create_banner(art, text, padding, position, width))


@cli.command()
@click.argument("text")
@click.pass_context
def title(ctx, text):
    """Set the terminal window title."""
    _engine(ctx).terminal.set_title(text)


@cli.command()
@click.pass_context
def clear(ctx):
    """Clear the screen."""
    _engine(ctx).terminal.clear_screen()


@cli.command()
def styles():
    """List spinner styles."""
    console = Console()
    table = Table(title="Spinner styles")
    table.add_column("Index", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Glyphs")
    for style in SpinnerStyle:
        table.add_row(str(style.index), style.name.lower(), " ".join(style.glyphs))
    console.print(table)


@cli.command()
@effect_options
@click.pass_context
def demo(ctx, delay, iterations, width, color):
    """Run every effect once."""
    settings = _settings(ctx, delay=delay, iterations=iterations, width=width)
    engine = _engine(ctx)

    _run_effect(ctx, engine.typewriter, "Hello from termfx", settings, color or CYAN)
    engine.terminal.write("\n")

    steps: list[tuple[Callable[..., EffectOutcome], tuple[Any, ...]]] = [
        (engine.loading_bar, (20, settings, color or GREEN)),
        (engine.progress_spinner, (20, settings, color, SpinnerStyle.DOTS, "Working")),
        (engine.wiggle, ("wiggle wiggle", settings, color or YELLOW)),
        (engine.matrix_decode, ("Wake up, Neo", settings, color or GREEN)),
        (engine.rainbow_text, ("Somewhere over the rainbow", settings)),
        (engine.slide_in, ("Sliding in", settings, color or MAGENTA)),
    ]
    for effect, args in steps:
        _run_effect(ctx, effect, *args)

    click.echo(box_text("termfx demo complete"))


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
