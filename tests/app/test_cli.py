"""Tests for the transfer-audit CLI."""

import json
import pickle

import pytest

from conftest import make_street_graph
from transfer_audit.cli import main


def _write_config(tmp_path, **analyzer):
    graph = tmp_path / "graph.pickle"
    with open(graph, "wb") as f:
        pickle.dump(make_street_graph(), f)
    out = tmp_path / "annotations.jsonl"
    cfg = {
        "run_id": "cli",
        "graph": {"file": str(graph), "fmt": "pickle"},
        "analyzer": {"radius_m": 100.0, **analyzer},
        "log": {"enabled": False},
        "sinks": [{"kind": "jsonl", "path": str(out)}],
    }
    path = tmp_path / "audit.json"
    path.write_text(json.dumps(cfg))
    return path, out


def test_run_writes_annotations(tmp_path, capsys):
    path, out = _write_config(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["run", "--config", str(path)])
    assert exc.value.code == 0

    summary = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert summary == {"stops_analyzed": 3, "too_long": 2, "not_found": 4}
    assert len(out.read_text().splitlines()) == 6


def test_radius_override(tmp_path, capsys):
    path, out = _write_config(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["run", "--config", str(path), "--radius-m", "70"])
    assert exc.value.code == 0
    summary = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    # only the S1-S2 pair lies within 70 m
    assert summary == {"stops_analyzed": 3, "too_long": 2, "not_found": 0}


def test_invalid_radius_exits_nonzero(tmp_path, capsys):
    path, _ = _write_config(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["run", "--config", str(path), "--radius-m", "0"])
    assert exc.value.code == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_missing_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
