"""Rich renderer for session snapshots."""

from __future__ import annotations

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.table import Table
from rich.text import Text

from ggrep.models.query import FLAG_OPTIONS
from ggrep.models.session import RenderSnapshot, ResultRow, SessionStatus
from ggrep.ui.keys import EDITING_HELP

# Pattern line, command line, status line, rule.
HEADER_ROWS = 4
LEGEND_WIDTH = 30
MIN_COLS_FOR_LEGEND = LEGEND_WIDTH + 20

_STATUS_STYLES = {
    SessionStatus.EDITING: "bold",
    SessionStatus.SEARCHING: "bold yellow",
    SessionStatus.BROWSING: "bold green",
    SessionStatus.ERROR: "bold red",
    SessionStatus.EXITED: "dim",
}


def render_pattern_line(snapshot: RenderSnapshot) -> Text:
    """The editable pattern with the cursor cell shown in reverse video."""
    query = snapshot.query
    editing = snapshot.status in (SessionStatus.EDITING, SessionStatus.ERROR)
    line = Text("-> " if editing else "   ", style="bold")
    line.append("Pattern: ")
    line.append(query.pattern[: query.cursor])
    cursor_char = query.pattern[query.cursor : query.cursor + 1] or " "
    line.append(cursor_char, style="reverse")
    line.append(query.pattern[query.cursor + 1 :])
    return line


def render_status_line(snapshot: RenderSnapshot) -> Text:
    style = _STATUS_STYLES[snapshot.status]
    match snapshot.status:
        case SessionStatus.SEARCHING:
            return Text("[SEARCHING] running git grep…", style=style)
        case SessionStatus.ERROR:
            return Text(f"[ERROR]: {snapshot.error_message}", style=style)
        case SessionStatus.BROWSING:
            return Text(
                f"[RESULT]: {snapshot.hit_lines} lines, {snapshot.hit_files} files", style=style
            )
        case _:
            text = Text("[EDITING] press ENTER to search", style=style)
            if snapshot.pending:
                text.append("  (searching…)", style="yellow")
            elif snapshot.error_message:
                text.append(f"  last error: {snapshot.error_message}", style="red")
            elif snapshot.results_query is not None:
                text.append(
                    f"  showing {snapshot.hit_lines} lines for "
                    f"{snapshot.results_query.pattern!r}",
                    style="dim",
                )
            return text


def render_row(row: ResultRow, selected: bool, dim: bool) -> Text:
    if row.entry is None:
        text = Text(row.file_path, style="underline", no_wrap=True, overflow="ellipsis")
        text.append(f" ({row.line_count} lines)")
    else:
        text = Text("---> " if selected else "     ", no_wrap=True, overflow="ellipsis")
        text.append(f"{row.entry.line_number:>5}", style="cyan")
        text.append(": ")
        text.append(row.entry.line_text, style="reverse" if selected else "")
    if dim:
        text.stylize("dim")
    return text


def render_legend(snapshot: RenderSnapshot) -> Table:
    legend = Table.grid(padding=(0, 1))
    legend.add_column(no_wrap=True)
    legend.add_column(no_wrap=True)
    legend.add_row(Text("[ACTIONS]", style="bold"), "")
    for item in EDITING_HELP:
        legend.add_row(item.label, Text(f"[{item.keys}]", style="dim"))
    legend.add_row("", "")
    legend.add_row(Text("[GIT GREP FLAGS]", style="bold"), "")
    for option in FLAG_OPTIONS:
        active = option.flag in snapshot.query.flags
        mark = Text("o " if active else "  ", style="bold green")
        mark.append(option.option, style="bold" if active else "")
        legend.add_row(mark, Text(f"[M-{option.key}]", style="dim"))
    return legend


def render_frame(snapshot: RenderSnapshot, width: int) -> RenderableType:
    """Build the full frame for ``snapshot`` at terminal ``width``."""
    dim_rows = snapshot.status is not SessionStatus.BROWSING
    lines: list[RenderableType] = [
        render_pattern_line(snapshot),
        Text(f"$ {snapshot.command_line}", style="dim", no_wrap=True, overflow="ellipsis"),
        render_status_line(snapshot),
        Text("-" * max(width, 1), style="dim", no_wrap=True, overflow="crop"),
    ]
    window = snapshot.window
    for index, row in enumerate(window.rows):
        lines.append(render_row(row, index == window.selected_row, dim_rows))
    main = Group(*lines)

    if not snapshot.legend_visible or width < MIN_COLS_FOR_LEGEND:
        return main
    layout = Table.grid(expand=True)
    layout.add_column(ratio=1)
    layout.add_column(width=LEGEND_WIDTH)
    layout.add_row(main, render_legend(snapshot))
    return layout


class Renderer:
    """Paints snapshots into a full-screen rich Live display."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._live: Live | None = None

    def __enter__(self) -> Renderer:
        self._live = Live(console=self.console, screen=True, auto_refresh=False)
        self._live.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        if self._live is not None:
            self._live.__exit__(exc_type, exc, tb)
            self._live = None

    def viewport_height(self) -> int:
        return max(self.console.size.height - HEADER_ROWS, 1)

    def render(self, snapshot: RenderSnapshot) -> None:
        frame = render_frame(snapshot, self.console.size.width)
        if self._live is None:
            self.console.print(frame)
        else:
            self._live.update(frame, refresh=True)
