from config.config_loader import DEFAULT_CONFIG
from simulator.definition import Definition


def make_config(**overrides):
    config = DEFAULT_CONFIG.copy()
    config["log_enabled"] = False
    config.update(overrides)
    return config


def make_definition(rows, states=("s", "done"), initial="s", accept="done", blank="_", alphabet=("_",)):
    """Definition from (current, read, next, write, move) tuples."""
    return Definition.from_dict({
        "states": list(states),
        "alphabet": list(alphabet),
        "blankSymbol": blank,
        "initialState": initial,
        "acceptState": accept,
        "transitions": [
            {"currentState": c, "readSymbol": r, "nextState": n, "writeSymbol": w, "move": m}
            for c, r, n, w, m in rows
        ],
    })


class ManualTicker:
    """Ticker stand-in whose ticks are fired by the test."""

    def __init__(self):
        self.active = False
        self.interval = None
        self.callback = None
        self.starts = 0
        self.cancels = 0

    def start(self, interval, callback):
        self.cancel()
        self.interval = interval
        self.callback = callback
        self.active = True
        self.starts += 1

    def cancel(self):
        if self.active:
            self.cancels += 1
        self.active = False

    def fire(self, times=1):
        for _ in range(times):
            if self.active:
                self.callback()
