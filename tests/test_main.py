"""Tests for the host shell's command-line configuration."""

from gridsnake.config import CFG
from gridsnake.main import parse_args


def test_flags_override_config():
    cfg = parse_args(["--difficulty", "hard", "--grid-size", "12", "--seed", "5",
                      "--highscore-path", "/tmp/hs.json", "--fps", "30", "--log-level", "debug"])
    assert cfg.difficulty == "hard"
    assert cfg.grid_size == 12
    assert cfg.seed == 5
    assert cfg.highscore_path == "/tmp/hs.json"
    assert cfg.fps == 30
    assert cfg.log_level == "debug"


def test_defaults_come_from_config():
    cfg = parse_args([])
    assert cfg == CFG
