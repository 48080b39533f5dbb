import json
import logging

import pytest

from config_io import load_json_config
from config_parsing import parse_display_config, parse_log_level, parse_session_config
from models import SessionConfig
from utils import as_color, deep_get, deep_merge


def test_defaults_when_game_section_missing():
    assert parse_session_config({}) == SessionConfig()


def test_game_section_values_are_used_and_clamped():
    cfg = {
        "game": {
            "grid_size": 12,
            "obstacles_per_level": "5",
            "auto_step_ms": 0,
            "victory_delay_ms": "soon",
            "seed": "9",
        }
    }
    parsed = parse_session_config(cfg)
    assert parsed.grid_size == 12
    assert parsed.obstacles_per_level == 5
    assert parsed.auto_step_ms == 1
    assert parsed.victory_delay_ms == 2000
    assert parsed.seed == 9


def test_display_config_falls_back_on_bad_colors():
    display = parse_display_config(
        {"window": {"cell_size": 40, "title": "Maze"}, "colors": {"hint": "yellow"}}
    )
    assert display.cell_size == 40
    assert display.title == "Maze"
    assert display.hint == (181, 137, 0)


def test_log_level_parsing():
    assert parse_log_level({"log_level": "debug"}) == logging.DEBUG
    assert parse_log_level({"log_level": "chatty"}) == logging.INFO
    assert parse_log_level({}) == logging.INFO


def test_load_json_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"game": {"grid_size": 8}}), encoding="utf-8")
    assert load_json_config(path) == {"game": {"grid_size": 8}}


def test_load_json_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_load_json_config_invalid(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ not json", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_shipped_config_parses():
    from pathlib import Path

    cfg = load_json_config(Path(__file__).resolve().parent.parent / "config.json")
    assert parse_session_config(cfg) == SessionConfig()


def test_utils_helpers():
    assert deep_get({"a": {"b": 2}}, "a.b", 0) == 2
    assert deep_get({"a": {"b": 2}}, "a.c", 0) == 0
    assert deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}}) == {"a": {"b": 1, "c": 3}}
    assert as_color([300, -5, 10], (0, 0, 0)) == (255, 0, 10)
    assert as_color(None, (1, 2, 3)) == (1, 2, 3)


def test_load_config_merges_over_defaults(tmp_path):
    from config_io import DEFAULT_CONFIG, load_config

    path = tmp_path / "config.json"
    path.write_text(json.dumps({"game": {"grid_size": 6}}), encoding="utf-8")

    cfg = load_config(path)
    assert cfg["game"]["grid_size"] == 6
    assert cfg["game"]["start_level"] == 1
    assert cfg["window"] == DEFAULT_CONFIG["window"]


def test_load_config_missing_file(tmp_path):
    from config_io import DEFAULT_CONFIG, load_config

    assert load_config(tmp_path / "absent.json") == DEFAULT_CONFIG
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.json", required=True)
