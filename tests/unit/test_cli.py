"""
Tests for the command line entry point.
"""

import json

import pandas as pd
from medoids.cli import main


def test_cli_clusters_files_and_writes_output(tmp_path, capsys):
    first = tmp_path / "first.csv"
    first.write_text("x,y\n0,0\n0,1\n")
    second = tmp_path / "second.csv"
    second.write_text("x,y\n10,10\n10,11\n10,9\n")
    output = tmp_path / "clusters.csv"

    exit_code = main([str(first), str(second), "-k", "2", "--seed", "1", "--output", str(output)])

    assert exit_code == 0
    assert "Total cost:" in capsys.readouterr().out
    results = pd.read_csv(output)
    assert len(results) == 5
    assert results['is_medoid'].sum() == 2


def test_cli_fails_on_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.csv")]) == 1


def test_cli_fails_on_invalid_points(tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("x,y\n0,0\nabc,1\n")

    assert main([str(bad)]) == 1


def test_cli_fails_on_corrupt_workbook(tmp_path):
    corrupt = tmp_path / "points.xlsx"
    corrupt.write_bytes(b"PK\x03\x04garbage, not a workbook")

    assert main([str(corrupt)]) == 1


def test_cli_fails_on_missing_config(tmp_path):
    points = tmp_path / "points.csv"
    points.write_text("x,y\n0,0\n1,1\n")

    assert main([str(points), "--config", str(tmp_path / "missing.json")]) == 1


def test_cli_fails_on_unknown_config_key(tmp_path):
    points = tmp_path / "points.csv"
    points.write_text("x,y\n0,0\n1,1\n")
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"clustering": {"k_value": 2}}))

    assert main([str(points), "--config", str(config)]) == 1


def test_cli_rejects_k_above_configured_maximum(tmp_path):
    points = tmp_path / "points.csv"
    points.write_text("x,y\n0,0\n1,1\n")
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"clustering": {"max_k": 2}}))

    assert main([str(points), "-k", "3", "--config", str(config)]) == 1
    assert main([str(points), "-k", "2", "--config", str(config)]) == 0
