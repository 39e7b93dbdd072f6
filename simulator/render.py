from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from simulator.definition import Status

STATUS_COLORS = {
    Status.IDLE: "white",
    Status.RUNNING: "blue",
    Status.PAUSED: "yellow",
    Status.HALTED_ACCEPT: "green",
    Status.ERROR: "red",
}


def tape_window(state, window=10):
    """Cells within `window` of the head, clipped to the tape."""
    start = max(0, state.head - window)
    end = min(len(state.tape), state.head + window + 1)
    return start, end


def render_tape(state, window=10):
    """Display a window around the head, with a caret under the head cell."""
    if not state.tape:
        return Text("(empty tape)", style="dim")

    start, end = tape_window(state, window)
    tape_line = Text()
    head_line = Text()
    for pos in range(start, end):
        symbol = state.tape[pos]
        width = max(len(symbol), 1)
        if pos == state.head:
            tape_line.append(symbol.center(width), style="bold black on yellow")
            head_line.append("^".center(width), style="bold yellow")
        else:
            tape_line.append(symbol.center(width))
            head_line.append(" " * width)
        tape_line.append(" ")
        head_line.append(" ")
    return Text("\n").join([tape_line, head_line])


def render_snapshot(state, definition=None, tape_input="", window=10, message=None):
    """Tape, input/output line and the state/head/step cards for one snapshot."""
    parts = []
    if definition is not None:
        output = state.output(definition.blank_symbol)
        parts.append(Text.from_markup(
            f"[dim]Input:[/dim] [bold]{tape_input}[/bold] -> [dim]Output:[/dim] [bold]{output}[/bold]"
        ))
    parts.append(render_tape(state, window))

    cards = Table.grid(padding=(0, 4))
    cards.add_column()
    cards.add_column()
    cards.add_column()
    cards.add_column()
    color = STATUS_COLORS.get(state.status, "white")
    cards.add_row(
        f"[dim]State[/dim] [{color}]{state.current_state or 'N/A'}[/{color}]",
        f"[dim]Head[/dim] {state.head}",
        f"[dim]Steps[/dim] {state.steps}",
        f"[dim]Status[/dim] [{color}]{state.status.value}[/{color}]",
    )
    parts.append(cards)

    if message:
        parts.append(Text(message, style="red"))

    return Panel(Group(*parts), title="Turing Machine", border_style=color)
