from simulator.definition import Status
from simulator.turing_machine import TuringMachine


def evaluate(definition, tape_input="", max_steps=None, config=None, logger=None):
    """
    Run a fresh machine on tape_input until it halts or hits max_steps.
    Returns a plain summary dict of the final snapshot.
    """
    machine = TuringMachine(config=config, logger=logger)
    machine.initialize(definition, tape_input)
    final = machine.run_until_halt(max_steps)

    return {
        "input": tape_input,
        "output": machine.output(),
        "state": final.current_state,
        "steps": final.steps,
        "status": final.status.value,
        "accepted": final.status == Status.HALTED_ACCEPT,
        "halted": final.is_halted,
    }


def evaluate_presets(presets, max_steps=None, config=None):
    """Evaluate each preset on its sample input, keyed by preset name."""
    results = {}
    for preset in presets:
        results[preset.name] = evaluate(preset.definition, preset.tape_input,
                                        max_steps=max_steps, config=config)
    return results
