# lintrain/optim/adagrad.py
from __future__ import annotations

import math
from typing import Dict, Mapping

from lintrain.config.trainer_config import OptimizerFamily
from lintrain.optim.base import Optimizer, OptimizerParams


class AdagradOptimizer(Optimizer):
    """
    Per-coordinate adaptive rate: rate / sqrt(sum of squared gradients).
    """

    family = OptimizerFamily.ADAGRAD

    def __init__(self, params: OptimizerParams):
        super().__init__(params)
        self.sum_sq: Dict[str, float] = {}

    def _apply(
        self,
        weights: Dict[str, float],
        features: Mapping[str, float],
        gradient: Mapping[str, float],
        label: int,
        margin: float,
    ) -> None:
        rate = self.learning_rate
        for k, g in gradient.items():
            acc = self.sum_sq.get(k, 0.0) + g * g
            self.sum_sq[k] = acc
            weights[k] = weights.get(k, 0.0) - rate * g / math.sqrt(acc)

        self.regularize(weights, features.keys(), rate)

    def teardown(self) -> None:
        self.sum_sq.clear()
