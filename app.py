# app.py

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.live import Live
from rich.prompt import Prompt, IntPrompt
from rich.table import Table

from config.config_loader import load_config
from logger.logger import JSONLogger
from simulator.definition import DefinitionError, Status
from simulator.render import render_snapshot
from simulator.scheduler import interval_for_speed
from simulator.turing_machine import TuringMachine
from tools.definition_inspect import print_definition
from tools.presets import PRESETS, get_preset, load_definition

console = Console()

DEFAULT_CONFIG_PATH = Path("config/runtime_config.json")
POLL_SECONDS = 0.02
MAX_SPEED = 950


def clamp_speed(speed):
    return min(max(speed, 0), MAX_SPEED)


class Session:
    """What the controls need besides the engine itself."""

    def __init__(self, config):
        self.config = config
        self.speed = config["default_speed"]
        self.preset_name = None
        self.error = None

    @property
    def interval(self):
        return interval_for_speed(self.speed, self.config)


# === Utilities ===
def load_runtime_config(path=None):
    if path is None:
        path = DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None
    try:
        return load_config(path)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        sys.exit(1)

def build_machine(config):
    return TuringMachine(config=config, logger=JSONLogger.from_config(config))

def show(machine, session):
    console.print(render_snapshot(
        machine.state,
        machine.definition,
        machine.tape_input,
        window=session.config["render_window"],
        message=session.error,
    ))

def load_into(machine, session, definition, tape_input):
    """Initialize the engine, keeping the old machine when the definition is rejected."""
    try:
        machine.initialize(definition, tape_input)
        session.error = None
        return True
    except DefinitionError as e:
        session.error = str(e)
        console.print(f"[red]{e}[/red]")
        return False

async def run_live(machine, session):
    """Drive run mode on the event loop and redraw on every snapshot."""
    window = session.config["render_window"]

    def snapshot_view(state):
        return render_snapshot(state, machine.definition, machine.tape_input, window=window)

    with Live(snapshot_view(machine.state), console=console, refresh_per_second=30) as live:
        def refresh(state):
            live.update(snapshot_view(state))

        machine.subscribe(refresh)
        try:
            machine.run(session.interval)
            while machine.state.status == Status.RUNNING:
                await asyncio.sleep(POLL_SECONDS)
        finally:
            machine.pause()
            machine.unsubscribe(refresh)

def show_main_menu():
    console.print("\n[bold cyan]Turing Machine Simulator[/bold cyan]")
    console.print("[1] Load Preset")
    console.print("[2] Load Definition File")
    console.print("[3] Set Tape Input")
    console.print("[4] Step")
    console.print("[5] Run (Ctrl+C to pause)")
    console.print("[6] Reset (clear tape)")
    console.print("[7] Restart (original input)")
    console.print("[8] Inspect Definition")
    console.print("[9] Set Speed")
    console.print("[0] Exit")


def handle_load_preset(machine, session):
    console.print("\n[bold]Available Presets[/bold]\n")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index", justify="center")
    table.add_column("Preset", justify="left")
    table.add_column("Description", justify="left")
    for idx, preset in enumerate(PRESETS):
        table.add_row(str(idx), preset.name, preset.description)
    console.print(table)

    idx_choice = IntPrompt.ask("\nChoose a preset by Index", default=0)
    if idx_choice < 0 or idx_choice >= len(PRESETS):
        console.print("[red]Invalid choice.[/red]")
        return

    preset = PRESETS[idx_choice]
    if load_into(machine, session, preset.definition, preset.tape_input):
        session.preset_name = preset.name
        console.print(f"[green]Loaded preset {preset.name}.[/green]")

def handle_load_file(machine, session):
    path = Prompt.ask("Definition JSON path")
    try:
        definition = load_definition(path)
    except (FileNotFoundError, DefinitionError) as e:
        session.error = str(e)
        console.print(f"[red]{e}[/red]")
        return
    tape_input = Prompt.ask("Tape input", default="")
    if load_into(machine, session, definition, tape_input):
        session.preset_name = None
        console.print(f"[green]Loaded definition from {path}.[/green]")

def handle_set_input(machine, session):
    if machine.definition is None:
        console.print("[red]Load a definition first.[/red]")
        return
    tape_input = Prompt.ask("Tape input", default=machine.tape_input)
    load_into(machine, session, machine.definition, tape_input)

def handle_step(machine, session):
    if machine.definition is None:
        console.print("[red]Load a definition first.[/red]")
        return
    if machine.state.is_halted:
        console.print("[yellow]Machine has halted. Reset or restart to step again.[/yellow]")
        return
    machine.step()

def handle_run(machine, session):
    if machine.definition is None:
        console.print("[red]Load a definition first.[/red]")
        return
    if machine.state.is_halted:
        console.print("[yellow]Machine has halted. Reset or restart to run again.[/yellow]")
        return

    console.print(f"[cyan]Running every {session.interval * 1000:.0f} ms...[/cyan]")
    try:
        asyncio.run(run_live(machine, session))
    except KeyboardInterrupt:
        machine.pause()
        console.print("[yellow]Paused.[/yellow]")

def handle_set_speed(session):
    speed = IntPrompt.ask("Speed (0-950)", default=session.speed)
    session.speed = clamp_speed(speed)
    console.print(f"[green]Step interval is now {session.interval * 1000:.0f} ms.[/green]")


def interactive_main(config):
    machine = build_machine(config)
    session = Session(config)
    first = PRESETS[0]
    load_into(machine, session, first.definition, first.tape_input)
    session.preset_name = first.name

    while True:
        show(machine, session)
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=[str(i) for i in range(10)], default="4")

        if choice == "1":
            handle_load_preset(machine, session)
        elif choice == "2":
            handle_load_file(machine, session)
        elif choice == "3":
            handle_set_input(machine, session)
        elif choice == "4":
            handle_step(machine, session)
        elif choice == "5":
            handle_run(machine, session)
        elif choice == "6":
            machine.reset()
        elif choice == "7":
            machine.restart()
        elif choice == "8":
            if machine.definition is not None:
                print_definition(machine.definition, console=console)
        elif choice == "9":
            handle_set_speed(session)
        elif choice == "0":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args, config):
    if args.definition:
        try:
            definition = load_definition(args.definition)
        except (FileNotFoundError, DefinitionError) as e:
            console.print(f"[red]{e}[/red]")
            return 1
        tape_input = args.input or ""
    else:
        try:
            preset = get_preset(args.preset)
        except KeyError as e:
            console.print(f"[red]{e.args[0]}[/red]")
            return 1
        definition = preset.definition
        tape_input = preset.tape_input if args.input is None else args.input

    machine = build_machine(config)
    session = Session(config)
    if args.speed is not None:
        session.speed = clamp_speed(args.speed)
    if not load_into(machine, session, definition, tape_input):
        return 1

    if args.live:
        try:
            asyncio.run(run_live(machine, session))
        except KeyboardInterrupt:
            machine.pause()
    else:
        machine.run_until_halt(args.max_steps)

    show(machine, session)
    final = machine.state
    if final.status == Status.HALTED_ACCEPT:
        console.print(f"[green]Accepted after {final.steps} steps. Output: {machine.output()}[/green]")
        return 0
    if final.status == Status.ERROR:
        console.print(f"[red]No transition for ({final.current_state}, {final.read()!r}) "
                      f"after {final.steps} steps.[/red]")
        return 2
    console.print(f"[yellow]Stopped without halting after {final.steps} steps.[/yellow]")
    return 3

def main():
    parser = argparse.ArgumentParser(description="Turing Machine Simulator")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    parser.add_argument("--preset", help="Run a preset by name, e.g. 'Binary Increment'")
    parser.add_argument("--definition", help="Run a JSON definition file")
    parser.add_argument("--input", help="Tape input (defaults to the preset's sample input)")
    parser.add_argument("--max-steps", type=int, default=None, help="Step cap for non-live runs")
    parser.add_argument("--speed", type=int, default=None, help="Speed 0-950 for live runs")
    parser.add_argument("--live", action="store_true", help="Animate the run instead of jumping to the end")
    args = parser.parse_args()

    config = load_runtime_config(args.config)

    if args.preset or args.definition:
        sys.exit(cli_main(args, config))
    else:
        interactive_main(config)

if __name__ == "__main__":
    main()
