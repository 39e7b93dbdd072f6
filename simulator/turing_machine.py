from dataclasses import replace

from config.config_loader import DEFAULT_CONFIG
from simulator.definition import STEPPABLE, Definition, ExecutionState, Move, Status
from simulator.scheduler import Ticker


def build_tape(tape_input, blank_symbol, buffer):
    """Blank padding on both sides of the input, one cell per character."""
    padding = (blank_symbol,) * buffer
    return padding + tuple(tape_input or "") + padding


def advance(definition, table, state):
    """
    Apply one read-write-move-transition cycle and return the next snapshot.
    The input snapshot is never modified.
    """
    if definition is None or state.status not in STEPPABLE:
        return state

    # Acceptance is checked before the tape is read
    if state.current_state == definition.accept_state:
        return replace(state, status=Status.HALTED_ACCEPT)

    symbol = state.read(definition.blank_symbol)
    rule = table.get((state.current_state, symbol))
    if rule is None:
        return replace(state, status=Status.ERROR)

    tape = list(state.tape)
    tape[state.head] = rule.write_symbol

    head = state.head
    if rule.move == Move.RIGHT:
        head += 1
    elif rule.move == Move.LEFT:
        head -= 1

    # Grow by one cell so the head always addresses a real cell
    if head < 0:
        tape.insert(0, definition.blank_symbol)
        head = 0
    elif head >= len(tape):
        tape.append(definition.blank_symbol)

    if rule.next_state == definition.accept_state:
        status = Status.HALTED_ACCEPT
    elif state.status == Status.IDLE:
        status = Status.PAUSED
    else:
        status = state.status

    return ExecutionState(
        tape=tuple(tape),
        head=head,
        current_state=rule.next_state,
        steps=state.steps + 1,
        status=status,
    )


class TuringMachine:
    """
    Single-tape machine engine.

    Owns the loaded definition, the current execution snapshot and the
    ticker that drives run mode. Every mutating call returns the new
    snapshot and hands it to subscribed listeners.
    """

    def __init__(self, config=None, ticker=None, logger=None):
        self.config = config or DEFAULT_CONFIG
        self.tape_buffer = self.config["tape_buffer"]
        self.min_interval = self.config["min_interval_ms"] / 1000
        self.logger = logger
        self.definition = None
        self.tape_input = ""
        self._table = {}
        self._state = ExecutionState()
        self._ticker = ticker or Ticker()
        self._listeners = []

    @property
    def state(self):
        return self._state

    @property
    def is_running(self):
        return self._ticker.active

    def subscribe(self, listener):
        self._listeners.append(listener)

    def unsubscribe(self, listener):
        self._listeners.remove(listener)

    def _commit(self, state):
        previous = self._state
        self._state = state
        if state.status != Status.RUNNING:
            self._ticker.cancel()
        if state.is_halted and not previous.is_halted:
            self._log_halt(state)
        for listener in list(self._listeners):
            listener(state)
        return state

    def _log(self, event, **fields):
        if self.logger is not None:
            self.logger.log_event(event, **fields)

    def _log_halt(self, state):
        self._log("halt", status=state.status.value, state=state.current_state, steps=state.steps)
        if self.logger is None:
            return
        entry = {
            "definition": self.definition.to_dict(),
            "input": self.tape_input,
            "output": state.output(self.definition.blank_symbol),
            "state": state.current_state,
            "steps": state.steps,
        }
        if state.status == Status.HALTED_ACCEPT:
            self.logger.log_accepted([entry])
        else:
            self.logger.log_rejected([entry])

    def initialize(self, definition, tape_input=""):
        """
        Load a definition and build a fresh tape from tape_input.
        Raises DefinitionError, leaving the current machine untouched, when the
        initial or accept state is missing.
        """
        if isinstance(definition, dict):
            definition = Definition.from_dict(definition)
        definition.validate()

        self._ticker.cancel()
        self.definition = definition
        self.tape_input = tape_input or ""
        self._table = definition.transition_table()

        state = ExecutionState(
            tape=build_tape(self.tape_input, definition.blank_symbol, self.tape_buffer),
            head=self.tape_buffer,
            current_state=definition.initial_state,
            steps=0,
            status=Status.IDLE,
        )
        self._log("initialize", input=self.tape_input, state=definition.initial_state,
                  transitions=len(self._table))
        return self._commit(state)

    def step(self):
        """Single manual step. Ignored while running or once halted."""
        if self._state.status not in (Status.IDLE, Status.PAUSED):
            return self._state
        return self._commit(advance(self.definition, self._table, self._state))

    def _tick(self):
        if self._state.status != Status.RUNNING:
            self._ticker.cancel()
            return
        self._commit(advance(self.definition, self._table, self._state))

    def run(self, interval):
        """
        Step every `interval` seconds on the running event loop until paused
        or halted. Any earlier repetition is cancelled first.
        """
        self._ticker.cancel()
        if self.definition is None or self._state.is_halted:
            return self._state

        interval = max(interval, self.min_interval)
        self._ticker.start(interval, self._tick)
        self._log("run", interval=interval, steps=self._state.steps)
        if self._state.status == Status.RUNNING:
            return self._state
        return self._commit(replace(self._state, status=Status.RUNNING))

    def pause(self):
        if self._state.status != Status.RUNNING:
            return self._state
        self._ticker.cancel()
        self._log("pause", steps=self._state.steps)
        return self._commit(replace(self._state, status=Status.PAUSED))

    def reset(self):
        """Clear the tape: reload the last definition with an empty input."""
        self._ticker.cancel()
        if self.definition is None:
            return self._state
        self._log("reset")
        return self.initialize(self.definition, "")

    def restart(self):
        """Reload the last definition with the input it was loaded with."""
        self._ticker.cancel()
        if self.definition is None:
            return self._state
        return self.initialize(self.definition, self.tape_input)

    def run_until_halt(self, max_steps=None):
        """
        Step synchronously until the machine halts or max_steps transitions
        have been applied. Returns the final snapshot.
        """
        if max_steps is None:
            max_steps = self.config["max_steps"]
        self.pause()

        start = self._state.steps
        while not self._state.is_halted and self._state.steps - start < max_steps:
            before = self._state
            after = self.step()
            if after is before:
                break
        return self._state

    def output(self):
        if self.definition is None:
            return ""
        return self._state.output(self.definition.blank_symbol)
