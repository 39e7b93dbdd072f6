from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class DefinitionError(ValueError):
    """Raised when a machine definition cannot be loaded."""


class Move(str, Enum):
    LEFT = "L"
    RIGHT = "R"
    NONE = "N"


class Status(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    HALTED_ACCEPT = "halted-accept"
    ERROR = "error"

    @property
    def is_terminal(self):
        return self in (Status.HALTED_ACCEPT, Status.ERROR)


# Statuses from which the step algorithm is allowed to advance
STEPPABLE = (Status.IDLE, Status.PAUSED, Status.RUNNING)

# camelCase keys used by the external generator, snake_case fallback
_DEFINITION_KEYS = {
    "states": ("states", "states"),
    "alphabet": ("alphabet", "alphabet"),
    "blank_symbol": ("blankSymbol", "blank_symbol"),
    "initial_state": ("initialState", "initial_state"),
    "accept_state": ("acceptState", "accept_state"),
    "transitions": ("transitions", "transitions"),
}

_TRANSITION_KEYS = {
    "current_state": ("currentState", "current_state"),
    "read_symbol": ("readSymbol", "read_symbol"),
    "next_state": ("nextState", "next_state"),
    "write_symbol": ("writeSymbol", "write_symbol"),
    "move": ("move", "move"),
}


def _pick(data, keys, what):
    for key in keys:
        if key in data:
            return data[key]
    raise DefinitionError(f"{what} is missing required field '{keys[0]}'.")


def _text(value):
    """States and symbols are strings; JSON numbers are read as their text."""
    return "" if value is None else str(value)


def _text_list(value, field):
    if not isinstance(value, (list, tuple)):
        raise DefinitionError(f"Definition field '{field}' must be a list, got {type(value).__name__}.")
    return [_text(item) for item in value]


def parse_move(value):
    try:
        return Move(str(value).upper())
    except ValueError:
        raise DefinitionError(f"Unknown head move '{value}', expected one of L, R, N.") from None


@dataclass(frozen=True)
class Transition:
    current_state: str
    read_symbol: str
    next_state: str
    write_symbol: str
    move: Move

    @property
    def key(self) -> Tuple[str, str]:
        return (self.current_state, self.read_symbol)

    @classmethod
    def from_dict(cls, data):
        values = {name: _text(_pick(data, keys, "Transition")) for name, keys in _TRANSITION_KEYS.items()}
        values["move"] = parse_move(values["move"])
        return cls(**values)

    def to_dict(self):
        return {
            "currentState": self.current_state,
            "readSymbol": self.read_symbol,
            "nextState": self.next_state,
            "writeSymbol": self.write_symbol,
            "move": self.move.value,
        }


@dataclass(frozen=True)
class Definition:
    """
    Static description of a machine. Treated as immutable once loaded;
    editing a machine means building a new Definition and initializing again.
    """
    states: Tuple[str, ...]
    alphabet: Tuple[str, ...]
    blank_symbol: str
    initial_state: str
    accept_state: str
    transitions: Tuple[Transition, ...] = ()

    def __post_init__(self):
        # Accept lists from callers, store tuples
        object.__setattr__(self, "states", tuple(self.states))
        object.__setattr__(self, "alphabet", tuple(self.alphabet))
        object.__setattr__(self, "transitions", tuple(self.transitions))

    def validate(self):
        if not self.initial_state or self.initial_state not in self.states:
            raise DefinitionError("Initial state is not defined or not in the set of states.")
        if not self.accept_state or self.accept_state not in self.states:
            raise DefinitionError("Accept state is not defined or not in the set of states.")

    def transition_table(self) -> Dict[Tuple[str, str], Transition]:
        """
        Lookup keyed by (state, read symbol). When a key is defined more than
        once the rule listed last wins, so load order matters for ambiguous
        definitions.
        """
        table = {}
        for transition in self.transitions:
            table[transition.key] = transition
        return table

    @classmethod
    def from_dict(cls, data):
        """Build a Definition from the plain dict shape used by the UI and generator."""
        if not isinstance(data, dict):
            raise DefinitionError(f"Definition must be a mapping, got {type(data).__name__}.")
        values = {name: _pick(data, keys, "Definition") for name, keys in _DEFINITION_KEYS.items()}

        values["states"] = _text_list(values["states"], "states")
        for name in ("blank_symbol", "initial_state", "accept_state"):
            values[name] = _text(values[name])

        if not isinstance(values["transitions"], (list, tuple)):
            raise DefinitionError(
                f"Definition field 'transitions' must be a list, got {type(values['transitions']).__name__}."
            )
        transitions = []
        for entry in values["transitions"]:
            if isinstance(entry, Transition):
                transitions.append(entry)
            elif isinstance(entry, dict):
                transitions.append(Transition.from_dict(entry))
            else:
                raise DefinitionError(f"Transition must be a mapping, got {type(entry).__name__}.")
        values["transitions"] = transitions

        # The blank symbol is always a valid tape symbol
        alphabet = _text_list(values["alphabet"], "alphabet")
        if values["blank_symbol"] not in alphabet:
            alphabet.append(values["blank_symbol"])
        values["alphabet"] = alphabet

        return cls(**values)

    def to_dict(self):
        return {
            "states": list(self.states),
            "alphabet": list(self.alphabet),
            "blankSymbol": self.blank_symbol,
            "initialState": self.initial_state,
            "acceptState": self.accept_state,
            "transitions": [t.to_dict() for t in self.transitions],
        }


@dataclass(frozen=True)
class ExecutionState:
    """Snapshot of a machine between steps. A new value is produced on every change."""
    tape: Tuple[str, ...] = ()
    head: int = 0
    current_state: str = ""
    steps: int = 0
    status: Status = Status.IDLE

    def read(self, blank_symbol: Optional[str] = None):
        if 0 <= self.head < len(self.tape):
            return self.tape[self.head]
        return blank_symbol

    @property
    def is_halted(self):
        return self.status.is_terminal

    def output(self, blank_symbol):
        """Tape contents with leading and trailing blank cells stripped."""
        cells = [i for i, symbol in enumerate(self.tape) if symbol != blank_symbol]
        if not cells:
            return ""
        return "".join(self.tape[cells[0]:cells[-1] + 1])

    def to_dict(self):
        return {
            "tape": list(self.tape),
            "head": self.head,
            "currentState": self.current_state,
            "steps": self.steps,
            "status": self.status.value,
        }
