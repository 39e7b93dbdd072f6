import json
from dataclasses import dataclass
from pathlib import Path

from simulator.definition import Definition, DefinitionError


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    tape_input: str
    definition: Definition


def _rules(*rows):
    return [
        {"currentState": cur, "readSymbol": read, "nextState": nxt, "writeSymbol": write, "move": move}
        for cur, read, nxt, write, move in rows
    ]


# === Binary Increment ===
BINARY_INCREMENT = Definition.from_dict({
    "states": ["q_right", "q_flip", "q_halt"],
    "alphabet": ["0", "1", "_"],
    "blankSymbol": "_",
    "initialState": "q_right",
    "acceptState": "q_halt",
    "transitions": _rules(
        ("q_right", "0", "q_right", "0", "R"),
        ("q_right", "1", "q_right", "1", "R"),
        ("q_right", "_", "q_flip", "_", "L"),
        ("q_flip", "1", "q_flip", "0", "L"),
        ("q_flip", "0", "q_halt", "1", "N"),
        ("q_flip", "_", "q_halt", "1", "N"),
    ),
})

# === Unary Addition ===
UNARY_ADDITION = Definition.from_dict({
    "states": ["q_move_right", "q_go_end", "q_erase_one", "q_halt"],
    "alphabet": ["1", "_"],
    "blankSymbol": "_",
    "initialState": "q_move_right",
    "acceptState": "q_halt",
    "transitions": _rules(
        ("q_move_right", "1", "q_move_right", "1", "R"),
        ("q_move_right", "_", "q_go_end", "1", "R"),
        ("q_go_end", "1", "q_go_end", "1", "R"),
        ("q_go_end", "_", "q_erase_one", "_", "L"),
        ("q_erase_one", "1", "q_halt", "_", "N"),
    ),
})

# === 3-State Busy Beaver ===
BUSY_BEAVER_3 = Definition.from_dict({
    "states": ["a", "b", "c", "halt"],
    "alphabet": ["_", "1"],
    "blankSymbol": "_",
    "initialState": "a",
    "acceptState": "halt",
    "transitions": _rules(
        ("a", "_", "b", "1", "R"),
        ("a", "1", "c", "1", "L"),
        ("b", "_", "a", "1", "L"),
        ("b", "1", "b", "1", "R"),
        ("c", "_", "b", "1", "L"),
        ("c", "1", "halt", "1", "N"),
    ),
})

PRESETS = [
    Preset(
        name="Binary Increment",
        description="Adds one to a binary number. E.g., `1011` becomes `1100`.",
        tape_input="1011",
        definition=BINARY_INCREMENT,
    ),
    Preset(
        name="Unary Addition",
        description="Adds two unary numbers separated by a blank. E.g., `111_11` becomes `11111`.",
        tape_input="111_11",
        definition=UNARY_ADDITION,
    ),
    Preset(
        name="Busy Beaver (3 states)",
        description="Writes six 1s on a blank tape in 13 steps, then halts.",
        tape_input="",
        definition=BUSY_BEAVER_3,
    ),
]


def get_preset(name):
    """Look a preset up by name, ignoring case."""
    for preset in PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    names = ", ".join(p.name for p in PRESETS)
    raise KeyError(f"Unknown preset '{name}'. Available: {names}")


def load_definition(path):
    """Read a definition dict from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Definition file {path} not found.")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DefinitionError(f"Definition file {path} is not valid JSON: {e}") from e
    return Definition.from_dict(data)
