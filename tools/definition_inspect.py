import argparse

from rich.console import Console
from rich.table import Table

from tools.presets import get_preset, load_definition

UNDEFINED = "—"


def symbol_columns(definition):
    """Alphabet order, plus any symbol that only appears in a rule."""
    symbols = list(definition.alphabet)
    for transition in definition.transitions:
        if transition.read_symbol not in symbols:
            symbols.append(transition.read_symbol)
    return symbols


def action_rows(definition):
    """
    One row per state: the compact action for each read symbol,
    `<write><move> <next>`, or a dash when no rule applies.
    """
    table = definition.transition_table()
    symbols = symbol_columns(definition)
    rows = []
    for state in definition.states:
        row = [state]
        for symbol in symbols:
            rule = table.get((state, symbol))
            if rule is None:
                row.append(UNDEFINED)
            else:
                row.append(f"{rule.write_symbol}{rule.move.value} {rule.next_state}")
        rows.append(row)
    return rows


def transition_table(definition):
    table = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="left")
    for symbol in symbol_columns(definition):
        table.add_column(repr(symbol), justify="center")

    for row in action_rows(definition):
        state = row[0]
        if state == definition.accept_state:
            label = f"[green]{state}[/green] (accept)"
        elif state == definition.initial_state:
            label = f"[cyan]{state}[/cyan] (start)"
        else:
            label = state
        table.add_row(label, *row[1:])
    return table


def latex_table(definition):
    symbols = symbol_columns(definition)
    lines = [r"\begin{array}{c|" + "c" * len(symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join(f"\\text{{{s}}}" for s in symbols) + r" \\ \hline")
    for row in action_rows(definition):
        cells = [r"\text{" + cell.replace("_", r"\_") + "}" for cell in row]
        lines.append(" & ".join(cells) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def print_definition(definition, console=None, latex=False):
    console = console or Console()
    console.print(f"[bold]States:[/bold] {', '.join(definition.states)}")
    console.print(f"[bold]Alphabet:[/bold] {', '.join(definition.alphabet)}  (blank {definition.blank_symbol!r})")
    console.print(f"[bold]Start:[/bold] {definition.initial_state}  [bold]Accept:[/bold] {definition.accept_state}")
    console.print(transition_table(definition))
    if latex:
        console.print("\n=== LaTeX Table ===", markup=False)
        console.print(latex_table(definition), markup=False, highlight=False)


def main():
    parser = argparse.ArgumentParser(description="Turing machine definition inspector")
    parser.add_argument("--preset", help="Preset name to inspect, e.g. 'Binary Increment'")
    parser.add_argument("--definition", help="Path to a JSON definition file")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX array")
    args = parser.parse_args()

    if args.definition:
        definition = load_definition(args.definition)
    elif args.preset:
        definition = get_preset(args.preset).definition
    else:
        raise ValueError("You must specify either --preset or --definition.")

    print_definition(definition, latex=args.latex)

if __name__ == "__main__":
    main()
