from __future__ import annotations

from dataclasses import asdict
import unittest

import pytest
import yaml

from quizdeck.config import (
    AppConfig,
    DataConfig,
    LoggingConfig,
    ShuffleConfig,
    default_app_config,
)


class TestConfig(unittest.TestCase):
    def test_default_factory(self) -> None:
        cfg = default_app_config()
        self.assertEqual(cfg.logging.log_dir, "logs")
        self.assertEqual(cfg.logging.filename, "quizdeck.log")
        self.assertFalse(cfg.logging.structured)
        self.assertEqual(cfg.shuffle.audit_trials, 2000)
        self.assertEqual(cfg.shuffle.significance_level, 0.05)
        self.assertIsNone(cfg.data.max_items)
        self.assertFalse(cfg.data.strict)

    def test_missing_sections_fall_back_to_defaults(self) -> None:
        cfg = AppConfig.from_dict({"data": {"max_items": 5}})
        self.assertEqual(cfg.data.max_items, 5)
        self.assertEqual(cfg.logging.filename, "quizdeck.log")
        self.assertEqual(cfg.shuffle.audit_trials, 2000)


def test_json_round_trip(tmp_path):
    cfg = AppConfig(
        logging=LoggingConfig(level="DEBUG", log_dir="logs", filename="roundtrip.log", structured=True),
        shuffle=ShuffleConfig(seed=7, audit_trials=500, significance_level=0.01),
        data=DataConfig(max_items=20, strict=True),
    )
    out = tmp_path / "config.json"
    cfg.to_json(out)
    loaded = AppConfig.from_json(out)
    assert asdict(loaded) == asdict(cfg)


def test_yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "logging": {"level": "WARNING"},
        "shuffle": {"seed": 42, "audit_trials": 100},
    }))
    cfg = AppConfig.from_file(path)
    assert cfg.logging.level == "WARNING"
    assert cfg.shuffle.seed == 42
    assert cfg.shuffle.audit_trials == 100
    assert cfg.data.strict is False


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("QUIZDECK_SEED", "11")
    monkeypatch.setenv("QUIZDECK_LOG_LEVEL", "DEBUG")
    cfg = default_app_config()
    assert cfg.shuffle.seed == 11
    assert cfg.logging.level == "DEBUG"


def test_unknown_keys_are_rejected():
    with pytest.raises(TypeError):
        AppConfig.from_dict({"shuffle": {"sead": 1}})
