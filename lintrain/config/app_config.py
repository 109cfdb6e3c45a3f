#!filepath: lintrain/config/app_config.py
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from lintrain.config.log_config import LogConfig
from lintrain.config.trainer_config import TrainerConfig
from lintrain.utils.errors import ConfigurationError


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    trainer: TrainerConfig = Field(default_factory=TrainerConfig)

    @staticmethod
    def read_yaml(path: str | os.PathLike) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Config file must hold a mapping: {path}")
        return raw

    @classmethod
    def load(
        cls,
        path: str | os.PathLike | None = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "AppConfig":
        """
        加载 YAML 配置

        - `trainer:` 使用与命令行相同的 option 名（ftrlAlpha, class_probs ...）
        - overrides 覆盖 `trainer:` 中的同名 option
        """
        raw = cls.read_yaml(path) if path is not None else {}

        trainer_args = dict(raw.get("trainer") or {})
        if overrides:
            trainer_args.update(overrides)

        try:
            log = LogConfig(**(raw.get("log") or {}))
        except ValidationError as e:
            raise ConfigurationError(f"invalid log options: {e}") from e

        return cls(
            log=log,
            trainer=TrainerConfig.from_args(trainer_args),
        )
