import json

import pytest

from simulator.definition import DefinitionError, Status
from simulator.evaluator import evaluate, evaluate_presets
from tools.presets import BINARY_INCREMENT, PRESETS, get_preset, load_definition
from tests.helpers import make_config, make_definition


class TestPresets:

    def test_lookup_ignores_case(self):
        assert get_preset("binary increment").definition is BINARY_INCREMENT

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("Binary Subtraction")

    def test_presets_are_valid(self):
        for preset in PRESETS:
            preset.definition.validate()

    def test_load_definition_file(self, tmp_path):
        path = tmp_path / "increment.json"
        path.write_text(json.dumps(BINARY_INCREMENT.to_dict()), encoding="utf-8")
        assert load_definition(path) == BINARY_INCREMENT

    def test_load_definition_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_definition(tmp_path / "missing.json")

    def test_load_definition_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{states:", encoding="utf-8")
        with pytest.raises(DefinitionError):
            load_definition(path)


class TestEvaluator:

    def test_every_preset_accepts_its_sample(self):
        results = evaluate_presets(PRESETS, config=make_config())
        assert results["Binary Increment"]["output"] == "1100"
        assert results["Unary Addition"]["output"] == "11111"
        assert all(r["accepted"] for r in results.values())

    def test_busy_beaver(self):
        result = evaluate(get_preset("Busy Beaver (3 states)").definition, "", config=make_config())
        assert result["output"] == "111111"
        assert result["steps"] == 13
        assert result["state"] == "halt"

    def test_error_summary(self):
        result = evaluate(make_definition([]), "1", config=make_config())
        assert result["status"] == Status.ERROR.value
        assert result["halted"] is True
        assert result["accepted"] is False
        assert result["steps"] == 0

    def test_step_cap(self):
        looping = make_definition([("s", "_", "s", "_", "L")])
        result = evaluate(looping, "", max_steps=40, config=make_config())
        assert result["steps"] == 40
        assert result["halted"] is False
        assert result["status"] == Status.PAUSED.value
