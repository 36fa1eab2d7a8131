"""
Request models, environment config and the assign-groups CLI.

Run:  python -m pytest group_engine/test_requests_cli.py
"""

from __future__ import annotations

import contextlib
import io
import json
import sys
import os

import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from culture_kernel.domain_types import Framework
from group_engine.cli import main
from group_engine.genetic import SearchConfig
from group_engine.requests import PartitionRequest
from group_engine.settings import load_search_config

GROUPING_VARS = (
    "GROUPING_POPULATION_SIZE",
    "GROUPING_GENERATIONS",
    "GROUPING_MUTATION_RATE",
    "GROUPING_ELITISM_RATE",
    "GROUPING_TOURNAMENT_SIZE",
    "GROUPING_TIMEOUT_MS",
)


def _lewis_participant(pid, country, linear):
    return {
        "id": pid,
        "countryCode": country,
        "lewis": {"linearActive": linear, "multiActive": 0.5, "reactive": 1 - linear},
    }


def _payload(n=6, **extra):
    data = {
        "participants": [
            _lewis_participant(f"p{i}", f"C{i}", round(i / n, 3)) for i in range(n)
        ],
        "framework": "lewis",
    }
    data.update(extra)
    return data


def _run_cli(tmp_path, payload, *args):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main([str(path), "--env-file", str(tmp_path / "missing.env"), *args])
    return code, out.getvalue()


@pytest.fixture(autouse=True)
def _clean_grouping_env(monkeypatch):
    for var in GROUPING_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
    for var in GROUPING_VARS:
        os.environ.pop(var, None)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

def test_request_accepts_camel_case():
    request = PartitionRequest.model_validate(_payload(groupSize=3, seed="ws-1"))
    assert request.framework is Framework.LEWIS
    assert request.group_size == 3
    assert request.resolved_group_size() == 3
    participants = request.to_participants()
    assert participants[0].id == "p0"
    assert participants[0].profile.lewis.reactive == 1.0
    assert participants[0].profile.hall is None
    assert request.labels()["p2"] == "C2"


def test_request_accepts_snake_case_and_defaults():
    request = PartitionRequest.model_validate({
        "participants": [{
            "id": "x",
            "hofstede": {
                "power_distance": 0.1, "individualism": 0.2, "masculinity": 0.3,
                "uncertainty_avoidance": 0.4, "long_term_orientation": 0.5, "indulgence": 0.6,
            },
        }],
    })
    assert request.framework is Framework.HOFSTEDE
    assert request.resolved_group_size() == "flexible"
    assert request.seed is None
    assert request.labels() == {"x": "x"}


def test_request_rejects_bad_scores():
    payload = _payload(2)
    payload["participants"][0]["lewis"]["linearActive"] = 1.2
    with pytest.raises(ValidationError):
        PartitionRequest.model_validate(payload)


def test_request_rejects_bad_group_size():
    with pytest.raises(ValidationError):
        PartitionRequest.model_validate(_payload(groupSize=5))


def test_request_rejects_duplicate_ids():
    payload = _payload(3)
    payload["participants"][2]["id"] = "p0"
    with pytest.raises(ValidationError):
        PartitionRequest.model_validate(payload)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_settings_defaults(tmp_path):
    assert load_search_config(str(tmp_path / "none.env")) == SearchConfig()


def test_settings_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("GROUPING_GENERATIONS", "12")
    monkeypatch.setenv("GROUPING_MUTATION_RATE", "0.25")
    config = load_search_config(str(tmp_path / "none.env"))
    assert config.generations == 12
    assert config.mutation_rate == 0.25
    assert config.population_size == 50


def test_settings_from_env_file(tmp_path):
    env_file = tmp_path / "grouping.env"
    env_file.write_text("GROUPING_POPULATION_SIZE=8\nGROUPING_TIMEOUT_MS=500\n", encoding="utf-8")
    config = load_search_config(str(env_file))
    assert config.population_size == 8
    assert config.timeout_ms == 500


def test_settings_reject_garbage(tmp_path, monkeypatch):
    monkeypatch.setenv("GROUPING_POPULATION_SIZE", "lots")
    with pytest.raises(ValueError):
        load_search_config(str(tmp_path / "none.env"))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_cli_greedy_output(tmp_path):
    code, out = _run_cli(tmp_path, _payload(6, groupSize=3))
    assert code == 0
    data = json.loads(out)
    assert data["path"] == "greedy"
    assert [len(g) for g in data["groups"]] == [3, 3]
    assert "diagnostics" not in data


def test_cli_seed_and_diagnostics(tmp_path, monkeypatch):
    monkeypatch.setenv("GROUPING_GENERATIONS", "10")
    monkeypatch.setenv("GROUPING_TIMEOUT_MS", "60000")
    code, out = _run_cli(tmp_path, _payload(7), "--seed", "cli-7", "--group-size", "flexible", "--diagnostics")
    assert code == 0
    data = json.loads(out)
    assert data["path"] == "genetic"
    assert data["seed"] == "cli-7"
    assert data["diagnostics"]["participant_count"] == 7
    assert data["diagnostics"]["assignment_hash"] == data["assignment_hash"]


def test_cli_missing_framework_data(tmp_path):
    code, out = _run_cli(tmp_path, _payload(4), "--framework", "hall")
    assert code == 1
    assert out == ""


def test_cli_too_few_participants(tmp_path):
    code, _ = _run_cli(tmp_path, _payload(2))
    assert code == 2


def test_cli_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path)]) == 1
