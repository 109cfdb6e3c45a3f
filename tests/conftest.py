# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List

import pytest
from loguru import logger

from lintrain.config.trainer_config import TrainerConfig
from lintrain.data.instance import LabeledInstance


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def make_config() -> Callable[..., TrainerConfig]:
    """
    Factory fixture: raw string options → TrainerConfig.

    Usage:
        cfg = make_config(model="linear_svm", laplace="0.1")
    """

    def _make(**options: Any) -> TrainerConfig:
        return TrainerConfig.from_args(options)

    return _make


@pytest.fixture
def separable_instances() -> List[LabeledInstance]:
    """
    pos: x > 0, neg: x < 0, constant bias feature.
    """
    rows = []
    for i in range(1, 11):
        rows.append(LabeledInstance("pos", {"x": float(i), "bias": 1.0}))
        rows.append(LabeledInstance("neg", {"x": -float(i), "bias": 1.0}))
    return rows


@pytest.fixture
def override_file(tmp_path: Path) -> Callable[[str], Path]:
    def _write(text: str) -> Path:
        p = tmp_path / "class_probs.txt"
        p.write_text(text, encoding="utf-8")
        return p

    return _write
