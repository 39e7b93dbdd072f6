import argparse

from rich.console import Console

import app
from simulator.definition import ExecutionState, Status
from simulator.render import render_snapshot, render_tape
from tools.definition_inspect import action_rows, latex_table, print_definition
from tools.presets import BINARY_INCREMENT
from tests.helpers import make_config


def cli_args(**overrides):
    values = dict(preset="Binary Increment", definition=None, input=None,
                  max_steps=None, speed=None, live=False)
    values.update(overrides)
    return argparse.Namespace(**values)


def recorded_console():
    return Console(record=True, width=120, force_terminal=False)


class TestInspect:

    def test_action_rows(self):
        rows = {row[0]: row[1:] for row in action_rows(BINARY_INCREMENT)}
        # columns follow the alphabet: 0, 1, _
        assert rows["q_flip"] == ["1N q_halt", "0L q_flip", "1N q_halt"]
        assert rows["q_halt"] == ["—", "—", "—"]

    def test_latex_table(self):
        latex = latex_table(BINARY_INCREMENT)
        assert latex.startswith(r"\begin{array}{c|ccc}")
        assert latex.endswith(r"\end{array}")

    def test_print_definition(self):
        console = recorded_console()
        print_definition(BINARY_INCREMENT, console=console, latex=True)
        text = console.export_text()
        assert "q_right" in text
        assert r"\begin{array}" in text


class TestRender:

    def test_head_marker(self):
        state = ExecutionState(tape=tuple("_10_"), head=1, current_state="q", status=Status.PAUSED)
        text = render_tape(state, window=5).plain
        tape_line, head_line = text.split("\n")
        assert tape_line.split() == ["_", "1", "0", "_"]
        assert head_line.index("^") == tape_line.index("1")

    def test_snapshot_shows_status(self):
        console = recorded_console()
        state = ExecutionState(tape=tuple("_1_"), head=1, current_state="q_halt",
                               steps=4, status=Status.HALTED_ACCEPT)
        console.print(render_snapshot(state, BINARY_INCREMENT, "0"))
        text = console.export_text()
        assert "halted-accept" in text
        assert "Output: 1" in text


class TestCliMain:

    def test_preset_accepts(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        assert app.cli_main(cli_args(), make_config()) == 0
        assert "1100" in app.console.export_text()

    def test_custom_input(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        assert app.cli_main(cli_args(input="111"), make_config()) == 0
        assert "Output: 1000" in app.console.export_text()

    def test_missing_rule_exit_code(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        assert app.cli_main(cli_args(input="102"), make_config()) == 2

    def test_unknown_preset(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        assert app.cli_main(cli_args(preset="Nope"), make_config()) == 1

    def test_step_cap_exit_code(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        assert app.cli_main(cli_args(input="1011", max_steps=3), make_config()) == 3

    def test_live_run(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        config = make_config(min_interval_ms=1)
        assert app.cli_main(cli_args(live=True, speed=1000), config) == 0


class TestSpeed:

    def test_clamp_speed(self):
        assert app.clamp_speed(-500) == 0
        assert app.clamp_speed(400) == 400
        assert app.clamp_speed(5000) == app.MAX_SPEED

    def test_cli_speed_is_clamped(self, monkeypatch):
        monkeypatch.setattr(app, "console", recorded_console())
        seen = {}

        async def fake_run_live(machine, session):
            seen["speed"] = session.speed
            seen["interval"] = session.interval
            machine.run_until_halt()

        monkeypatch.setattr(app, "run_live", fake_run_live)
        config = make_config()
        assert app.cli_main(cli_args(live=True, speed=-500), config) == 0
        assert seen["speed"] == 0
        assert seen["interval"] <= config["max_interval_ms"] / 1000
