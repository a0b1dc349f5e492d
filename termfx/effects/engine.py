"""Effect engine: timed, frame-by-frame terminal animations.

Every effect is a bounded sequence of writes to one stream with a blocking
delay between frames. The frame count is fixed before the first frame.
Effects that redraw in place hide the cursor inside a scoped block, so it
comes back on every exit path, including errors and cancellation.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Sequence, TextIO

from rich.cells import cell_len

from termfx.cancellation import CancellationToken, EffectOutcome
from termfx.clock import FrameClock
from termfx.colors import RAINBOW, ColorEncoder
from termfx.effects import frames
from termfx.effects.spinners import SpinnerStyle
from termfx.exceptions import InvalidArgumentError
from termfx.models import (
    Color,
    Config,
    DecodeSchedule,
    EffectSettings,
    WiggleMode,
)
from termfx.random_source import RandomSource
from termfx.terminal import CLEAR_LINE, CSI, TerminalHandle
from termfx.utils.logging_config import LoggingContext, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)


class FrameLoop:
    """Iterates frame numbers with a delay and a cancellation check.

    After the body of frame ``n`` has been written the token is checked,
    then the clock sleeps. The check is skipped after the final frame, so a
    fully drawn run always counts as completed.
    """

    def __init__(
        self,
        count: int,
        delay: int,
        clock: FrameClock,
        cancel: CancellationToken | None = None,
    ) -> None:
        self.count = count
        self.delay = delay
        self.clock = clock
        self.cancel = cancel
        self.cancelled = False

    def __iter__(self) -> Iterator[int]:
        for frame in range(self.count):
            yield frame
            if (
                self.cancel is not None
                and frame < self.count - 1
                and self.cancel.cancelled
            ):
                self.cancelled = True
                logger.info("Effect cancelled after frame %d of %d", frame + 1, self.count)
                return
            self.clock.sleep(self.delay)

    @property
    def outcome(self) -> EffectOutcome:
        """Outcome of the loop so far."""
        return EffectOutcome.CANCELLED if self.cancelled else EffectOutcome.COMPLETED


class EffectEngine:
    """Runs text effects against a terminal handle."""

    def __init__(
        self,
        terminal: TerminalHandle | None = None,
        clock: FrameClock | None = None,
        rng: RandomSource | None = None,
        encoder: ColorEncoder | None = None,
        hide_cursor: bool = True,
    ) -> None:
        """Initialize effect engine.

        Args:
            terminal: Terminal to draw on (defaults to stdout)
            clock: Frame clock used between frames
            rng: Random source for scrambled glyphs
            encoder: Color encoder (defaults to 24-bit colors)
            hide_cursor: Hide the cursor while in-place effects redraw
        """
        self.terminal = terminal or TerminalHandle()
        self.clock = clock or FrameClock()
        self.rng = rng or RandomSource()
        self.encoder = encoder or ColorEncoder()
        self.hide_cursor = hide_cursor

    @classmethod
    def from_config(
        cls,
        config: Config | None = None,
        stream: TextIO | None = None,
        rng: RandomSource | None = None,
    ) -> EffectEngine:
        """Build an engine from display configuration."""
        config = config or Config()
        display = config.display
        return cls(
            terminal=TerminalHandle(
                stream,
                fallback_size=(display.fallback_width, display.fallback_height),
            ),
            rng=rng,
            encoder=ColorEncoder(display.color_mode),
            hide_cursor=display.hide_cursor,
        )

    @contextlib.contextmanager
    def _session(self, name: str, frame_count: int, redraw: bool = True) -> Iterator[None]:
        with LoggingContext(name, logger, effect=name, frames=frame_count):
            if redraw and self.hide_cursor:
                with self.terminal.hidden_cursor():
                    yield
            else:
                yield

    def _color_pair(self, color: Color | None) -> tuple[str, str]:
        prefix = self.encoder.prefix(color)
        return prefix, self.encoder.reset if prefix else ""

    @staticmethod
    def _check_count(name: str, value: int) -> int:
        if value < 0:
            msg = f"{name} must be non-negative, got {value}"
            raise InvalidArgumentError(msg, {name: value})
        return value

    def typewriter(
        self,
        text: str,
        settings: EffectSettings | None = None,
        color: Color | None = None,
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Reveal text one character at a time.

        Each character is its own flushed write followed by ``delay`` ms.
        The cursor is left right after the last character.
        """
        settings = settings or EffectSettings()
        if not text:
            return EffectOutcome.COMPLETED

        prefix, reset = self._color_pair(color)
        loop = FrameLoop(len(text), settings.delay, self.clock, cancel)
        with self._session("typewriter", loop.count, redraw=False):
            self.terminal.write(prefix)
            for index in loop:
                self.terminal.write(text[index])
            self.terminal.write(reset)
        return loop.outcome

    def loading_bar(
        self,
        total: int,
        settings: EffectSettings | None = None,
        color: Color | None = None,
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Fill a fixed-width bar over ``total`` steps, redrawn in place.

        Step k shows floor(width * k / total) filled segments and a
        ``k/total pct%`` label. One newline follows the final step.
        """
        settings = settings or EffectSettings()
        total = self._check_count("total", total)
        if total == 0:
            return EffectOutcome.COMPLETED

        prefix, reset = self._color_pair(color)
        loop = FrameLoop(total, settings.delay, self.clock, cancel)
        with self._session("loading_bar", loop.count):
            for frame in loop:
                line = frames.bar_frame(frame + 1, total, settings.width)
                self.terminal.write(f"\r{prefix}{line}{reset}")
            self.terminal.write("\n")
        return loop.outcome

    def progress_spinner(
        self,
        total: int,
        settings: EffectSettings | None = None,
        color: Color | None = None,
        style: SpinnerStyle | int | str = SpinnerStyle.CLASSIC,
        message: str = "",
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Cycle spinner glyphs for ``total`` frames with a counter.

        Frame k shows glyph (k - 1) mod cycle length of the chosen style.

        Raises:
            InvalidArgumentError: For a negative total or unknown style
        """
        settings = settings or EffectSettings()
        spinner = SpinnerStyle.resolve(style)
        total = self._check_count("total", total)
        if total == 0:
            return EffectOutcome.COMPLETED

        prefix, reset = self._color_pair(color)
        message = frames.single_line(message)
        loop = FrameLoop(total, settings.delay, self.clock, cancel)
        with self._session("progress_spinner", loop.count):
            for frame in loop:
                line = frames.spinner_frame(spinner.glyph(frame), frame + 1, total, message)
                self.terminal.write(f"\r{CLEAR_LINE}{prefix}{line}{reset}")
            self.terminal.write("\n")
        return loop.outcome

    def wiggle(
        self,
        text: str,
        settings: EffectSettings | None = None,
        color: Color | None = None,
        mode: WiggleMode | str = WiggleMode.BASELINE,
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Run a wave along the text for ``iterations`` passes.

        On frame f of a pass the character at index f is lifted one row
        (baseline mode) or uppercased (case mode). The text settles back on
        the baseline at the end.
        """
        settings = settings or EffectSettings()
        mode = WiggleMode(mode)
        chars = list(frames.single_line(text))
        if not chars:
            return EffectOutcome.COMPLETED

        prefix, reset = self._color_pair(color)
        loop = FrameLoop(settings.iterations * len(chars), settings.delay, self.clock, cancel)
        with self._session("wiggle", loop.count):
            if mode == WiggleMode.CASE:
                for frame in loop:
                    line = frames.wiggle_case_line(chars, frame % len(chars))
                    self.terminal.write(f"\r{prefix}{line}{reset}")
                if not loop.cancelled:
                    self.terminal.write(f"\r{prefix}{''.join(chars)}{reset}")
            else:
                first = True
                for frame in loop:
                    upper, lower = frames.wiggle_rows(chars, frame % len(chars))
                    self._draw_rows(upper, lower, prefix, reset, first)
                    first = False
                if not loop.cancelled:
                    self._draw_rows("", "".join(chars), prefix, reset, first)
            self.terminal.write("\n")
        return loop.outcome

    def _draw_rows(self, upper: str, lower: str, prefix: str, reset: str, first: bool) -> None:
        # The cursor rests at the end of the lower row between frames.
        up = "" if first else f"{CSI}1A"
        top = f"{prefix}{upper}{reset}" if upper else ""
        bottom = f"{prefix}{lower}{reset}" if lower else ""
        self.terminal.write(f"{up}\r{CLEAR_LINE}{top}\n\r{CLEAR_LINE}{bottom}")

    def matrix_decode(
        self,
        text: str,
        settings: EffectSettings | None = None,
        color: Color | None = None,
        schedule: DecodeSchedule | str = DecodeSchedule.LEFT_TO_RIGHT,
        alphabet: str = frames.SYMBOLS,
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Decode text out of random glyphs.

        Runs ``max(iterations, 1) * len(text)`` frames. Each position shows
        random glyphs until its settle frame, after which it shows its true
        character for good. The last frame always shows the whole text.
        """
        settings = settings or EffectSettings()
        schedule = DecodeSchedule(schedule)
        if not alphabet:
            msg = "Decode alphabet must not be empty"
            raise InvalidArgumentError(msg)
        chars = list(frames.single_line(text))
        if not chars:
            return EffectOutcome.COMPLETED

        passes = max(settings.iterations, 1)
        settle = frames.settle_frames(len(chars), passes, schedule, self.rng)
        prefix, reset = self._color_pair(color)
        loop = FrameLoop(passes * len(chars), settings.delay, self.clock, cancel)
        with self._session("matrix_decode", loop.count):
            for frame in loop:
                line = frames.decode_line(chars, frame, settle, self.rng, alphabet)
                self.terminal.write(f"\r{CLEAR_LINE}{prefix}{line}{reset}")
            self.terminal.write("\n")
        return loop.outcome

    def rainbow_text(
        self,
        text: str,
        settings: EffectSettings | None = None,
        palette: Sequence[Color] | None = None,
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Color text through a hue cycle, optionally rotating it in place.

        With ``iterations == 0`` the text is written once; otherwise the
        colors shift one position per frame for ``iterations`` full cycles.
        """
        settings = settings or EffectSettings()
        palette = list(palette) if palette else list(RAINBOW)
        line = frames.single_line(text)
        if not line:
            return EffectOutcome.COMPLETED

        count = max(settings.iterations * len(palette), 1)
        loop = FrameLoop(count, settings.delay if settings.iterations else 0, self.clock, cancel)
        with self._session("rainbow_text", loop.count, redraw=settings.iterations > 0):
            for frame in loop:
                self.terminal.write(f"\r{frames.rainbow_line(line, palette, frame, self.encoder)}")
            self.terminal.write("\n")
        return loop.outcome

    def slide_in(
        self,
        text: str,
        settings: EffectSettings | None = None,
        color: Color | None = None,
        from_terminal_edge: bool = False,
        *,
        cancel: CancellationToken | None = None,
    ) -> EffectOutcome:
        """Slide text from the right edge of a span to column 0.

        The span is ``settings.width`` or, with ``from_terminal_edge``, the
        terminal width. One frame is drawn per padding column.
        """
        settings = settings or EffectSettings()
        line = frames.single_line(text)
        if not line:
            return EffectOutcome.COMPLETED

        span = self.terminal.terminal_width() if from_terminal_edge else settings.width
        start = max(span - cell_len(line), 0)
        colored = self.encoder.wrap(line, color)
        loop = FrameLoop(start + 1, settings.delay, self.clock, cancel)
        with self._session("slide_in", loop.count):
            for frame in loop:
                padding = start - frame
                self.terminal.write(f"\r{CLEAR_LINE}{frames.slide_line(colored, padding)}")
            self.terminal.write("\n")
        return loop.outcome


def _default_engine() -> EffectEngine:
    return EffectEngine()


def typewriter(
    text: str,
    settings: EffectSettings | None = None,
    color: Color | None = None,
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Typewriter effect on stdout."""
    return _default_engine().typewriter(text, settings, color, cancel=cancel)


def loading_bar(
    total: int,
    settings: EffectSettings | None = None,
    color: Color | None = None,
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Loading bar on stdout."""
    return _default_engine().loading_bar(total, settings, color, cancel=cancel)


def progress_spinner(
    total: int,
    settings: EffectSettings | None = None,
    color: Color | None = None,
    style: SpinnerStyle | int | str = SpinnerStyle.CLASSIC,
    message: str = "",
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Progress spinner on stdout."""
    return _default_engine().progress_spinner(
        total, settings, color, style, message, cancel=cancel
    )


def wiggle(
    text: str,
    settings: EffectSettings | None = None,
    color: Color | None = None,
    mode: WiggleMode | str = WiggleMode.BASELINE,
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Wiggle effect on stdout."""
    return _default_engine().wiggle(text, settings, color, mode, cancel=cancel)


def matrix_decode(
    text: str,
    settings: EffectSettings | None = None,
    color: Color | None = None,
    schedule: DecodeSchedule | str = DecodeSchedule.LEFT_TO_RIGHT,
    alphabet: str = frames.SYMBOLS,
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Matrix decode effect on stdout."""
    return _default_engine().matrix_decode(
        text, settings, color, schedule, alphabet, cancel=cancel
    )


def rainbow_text(
    text: str,
    settings: EffectSettings | None = None,
    palette: Sequence[Color] | None = None,
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Rainbow text on stdout."""
    return _default_engine().rainbow_text(text, settings, palette, cancel=cancel)


def slide_in(
    text: str,
    settings: EffectSettings | None = None,
    color: Color | None = None,
    from_terminal_edge: bool = False,
    *,
    cancel: CancellationToken | None = None,
) -> EffectOutcome:
    """Slide-in effect on stdout."""
    return _default_engine().slide_in(
        text, settings, color, from_terminal_edge, cancel=cancel
    )


__all__ = [
    "EffectEngine",
    "FrameLoop",
    "loading_bar",
    "matrix_decode",
    "progress_spinner",
    "rainbow_text",
    "slide_in",
    "typewriter",
    "wiggle",
]
