"""Erase-then-redraw console renderer for the node dashboard.

The dashboard is a block of one line per busy node printed at the bottom
of the terminal.  Each refresh moves the cursor back to the first row of
the previous block, clears to the end of the screen and prints the block
again, so the terminal history above it never scrolls.

Escape sequences
----------------
- ``CSI n F``  : cursor to the start of the line *n* rows up
- ``CSI 0 J``  : erase from cursor to end of screen
- ``CSI 1 m`` / ``CSI 22 m`` : bold on / normal intensity
"""

from __future__ import annotations

from rich.console import Console

from nodeboard.core.state import DashboardState
from nodeboard.models.dashboard import NodeSlot

CSI = "\x1b["
ERASE_BELOW = f"{CSI}0J"
BOLD_ON = f"{CSI}1m"
BOLD_OFF = f"{CSI}22m"


def cursor_previous_line(rows: int) -> str:
    return f"{CSI}{rows}F"


def erase_sequence(row_count: int) -> str:
    """Control text that removes a block of *row_count* previously printed rows.

    The cursor sits at the start of the line after the block.  Emitting a
    newline and then moving up ``row_count + 1`` lines lands on the first
    row of the block even when the newline scrolls the screen.
    """
    if row_count <= 0:
        return ""
    return "\n" + cursor_previous_line(row_count + 1) + ERASE_BELOW


def fit_to_width(text: str, width: int) -> str:
    """Truncate *text* to at most ``width - 1`` characters."""
    return text[: max(width - 1, 0)]


def format_node_line(slot: NodeSlot) -> str:
    return f"{slot.project_path} {slot.target_name} ({slot.elapsed_seconds:.1f}s)"


def format_completion_line(project_path: str, seconds: float) -> str:
    return f"{project_path} {BOLD_ON}completed{BOLD_OFF} ({seconds:.1f}s)"


class ConsoleRenderer:
    """Draws the node table of a ``DashboardState`` onto a Rich console's stream.

    Writes go straight to ``console.file``: the dashboard relies on exact
    escape sequences, which Rich's own rendering would restyle.  The
    console supplies the stream and the terminal width.

    Parameters
    ----------
    state:
        The shared dashboard aggregate.  Its lock serializes every write.
    console:
        Rich Console instance.  A new one is created if not provided.
    width:
        Overrides the console's detected width for truncation.
    """

    def __init__(
        self,
        state: DashboardState,
        console: Console | None = None,
        *,
        width: int | None = None,
    ) -> None:
        self._state = state
        self.console = console or Console()
        self._width = width

    @property
    def width(self) -> int:
        return self._width if self._width is not None else self.console.width

    # ------------------------------------------------------------------
    # Erase / redraw
    # ------------------------------------------------------------------

    def erase(self) -> None:
        """Remove the rows printed by the previous redraw, if any."""
        with self._state.lock:
            if self._state.used_node_count == 0:
                return
            self._write(erase_sequence(self._state.used_node_count))

    def redraw(self) -> None:
        """Print one line per busy node in index order and remember how many."""
        with self._state.lock:
            width = self.width
            lines = [
                fit_to_width(format_node_line(slot), width)
                for slot in self._state.nodes
                if slot is not None
            ]
            self._write("".join(f"{line}\n" for line in lines))
            self._state.used_node_count = len(lines)

    def refresh(self) -> None:
        with self._state.lock:
            self.erase()
            self.redraw()

    # ------------------------------------------------------------------
    # Completion lines
    # ------------------------------------------------------------------

    def print_completion(self, project_path: str, seconds: float) -> None:
        """Print a project completion line above the dashboard.

        The dashboard is erased, the line written into the scrollback and
        the dashboard drawn again below it, all in one critical section.
        """
        with self._state.lock:
            self.erase()
            self._write(format_completion_line(project_path, seconds) + "\n")
            self.redraw()

    def _write(self, text: str) -> None:
        if not text:
            return
        stream = self.console.file
        stream.write(text)
        stream.flush()
