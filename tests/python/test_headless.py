import csv
import json

import pytest
import yaml

from menagerie.config import reference_scenario
from menagerie.errors import NoConvergence
from menagerie.headless import main, run_headless


def _read_csv(path):
    with path.open(newline="") as handle:
        return list(csv.reader(handle))


def test_headless_pass_log_and_summary(tmp_path):
    log_path = tmp_path / "passes.csv"
    summary_path = tmp_path / "summary.json"

    report = run_headless(reference_scenario(), log_path=log_path, summary_path=summary_path, deterministic_log=True)

    assert report.converged
    rows = _read_csv(log_path)
    assert rows == [["pass", "stepped", "unsafe_after", "pass_ms"], ["1", "3", "0", "0.000"]]

    payload = json.loads(summary_path.read_text())
    assert payload["converged"] is True
    assert payload["passes"] == 1
    assert payload["failure"] is None
    assert [(a["kind"], a["x"], a["y"]) for a in payload["agents"]] == [
        ("Flyer", 28.0, 26.0),
        ("Swimmer", 22.0, -2.0),
        ("Runner", 24.0, -4.0),
    ]


def test_headless_random_agents_are_reproducible(tmp_path):
    outputs = []
    for name in ("a", "b"):
        summary_path = tmp_path / f"{name}.json"
        log_path = tmp_path / f"{name}.csv"
        run_headless(
            reference_scenario(),
            seed=9,
            random_agents=25,
            spread=6.0,
            log_path=log_path,
            summary_path=summary_path,
            deterministic_log=True,
        )
        outputs.append((summary_path.read_text(), log_path.read_text()))

    assert outputs[0] == outputs[1]
    payload = json.loads(outputs[0][0])
    assert len(payload["agents"]) == 28
    assert payload["seed"] == 9


def test_headless_writes_summary_before_reporting_failure(tmp_path):
    config = reference_scenario()
    config.ecosystem.max_passes = 3
    config.agents[0].position = config.hazard
    summary_path = tmp_path / "summary.json"

    with pytest.raises(NoConvergence):
        run_headless(config, summary_path=summary_path)

    payload = json.loads(summary_path.read_text())
    assert payload["converged"] is False
    assert payload["failure"] == {"reason": "max_passes", "unsafe_ids": [0]}


def test_cli_exit_codes(tmp_path):
    good = tmp_path / "good.yaml"
    good.write_text(yaml.safe_dump(reference_scenario().to_dict()))
    main(["--config", str(good), "--workers", "2"])

    bad = tmp_path / "bad.yaml"
    bad.write_text(yaml.safe_dump({"agents": [{"kind": "Swimmer", "medium": "Air", "position": [0, 0]}]}))
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(bad)])
    assert excinfo.value.code == 1


@pytest.mark.parametrize("flag, value", [("--workers", "0"), ("--max-passes", "-5")])
def test_cli_rejects_non_positive_counts(flag, value, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([flag, value])

    assert excinfo.value.code == 2
    assert "must be at least 1" in capsys.readouterr().err
