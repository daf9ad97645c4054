#!/usr/bin/env python3
"""
Tests for the command-line interface.
"""

import json

import pytest

from locimages import cli


def test_search_prints_json(tmp_path, capsys):
    code = cli.main(["--config", str(tmp_path / "none.yaml"),
                     "search", "--location", "Austin", "--sources", "zillow"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["count"] == 6
    assert data["sources"] == ["zillow"]


def test_blank_location_fails(tmp_path, capsys):
    code = cli.main(["--config", str(tmp_path / "none.yaml"),
                     "search", "--location", " ", "--sources", "zillow"])

    assert code == 1
    assert capsys.readouterr().out.count("{") == 0


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_invalid_logging_level_exits_through_validation(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--config", str(config_path), "search", "--location", "Paris", "--sources", "zillow"])

    assert exc_info.value.code == 1
