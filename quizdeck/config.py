from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def _env_int(name: str) -> Optional[int]:
    val = os.getenv(name)
    return int(val) if val not in (None, "") else None


@dataclass
class LoggingConfig:
    level: str = field(default_factory=lambda: os.getenv("QUIZDECK_LOG_LEVEL", "INFO"))
    log_dir: Optional[str] = "logs"
    filename: str = "quizdeck.log"
    structured: bool = False


@dataclass
class ShuffleConfig:
    # None draws a fresh order each run
    seed: Optional[int] = field(default_factory=lambda: _env_int("QUIZDECK_SEED"))
    audit_trials: int = 2000
    significance_level: float = 0.05


@dataclass
class DataConfig:
    max_items: Optional[int] = None
    strict: bool = False


@dataclass
class AppConfig:
    logging: LoggingConfig = None  # type: ignore[assignment]
    shuffle: ShuffleConfig = None  # type: ignore[assignment]
    data: DataConfig = None  # type: ignore[assignment]

    @staticmethod
    def from_dict(payload: Dict[str, Any]) -> "AppConfig":
        payload = payload or {}
        return AppConfig(
            logging=LoggingConfig(**(payload.get("logging") or {})),
            shuffle=ShuffleConfig(**(payload.get("shuffle") or {})),
            data=DataConfig(**(payload.get("data") or {})),
        )

    @staticmethod
    def from_json(path: str | Path) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as f:
            return AppConfig.from_dict(json.load(f))

    @staticmethod
    def from_yaml(path: str | Path) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as f:
            return AppConfig.from_dict(yaml.safe_load(f))

    @staticmethod
    def from_file(path: str | Path) -> "AppConfig":
        if Path(path).suffix in {".yaml", ".yml"}:
            return AppConfig.from_yaml(path)
        return AppConfig.from_json(path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logging": asdict(self.logging),
            "shuffle": asdict(self.shuffle),
            "data": asdict(self.data),
        }

    def to_json(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)


def default_app_config() -> AppConfig:
    return AppConfig(
        logging=LoggingConfig(),
        shuffle=ShuffleConfig(),
        data=DataConfig(),
    )
