# lintrain/optim/mira.py
from __future__ import annotations

from typing import Dict, Mapping

from lintrain.config.trainer_config import OptimizerFamily
from lintrain.optim.base import Optimizer, hinge_aggregate, squared_norm


class MIRAOptimizer(Optimizer):
    """
    Binary MIRA: smallest change that fixes the unit-margin violation.

        tau = max(0, 1 - margin) / ||x||^2
    """

    family = OptimizerFamily.MIRA

    def aggregate(self, batch):
        return hinge_aggregate(batch)

    def _apply(
        self,
        weights: Dict[str, float],
        features: Mapping[str, float],
        gradient: Mapping[str, float],
        label: int,
        margin: float,
    ) -> None:
        loss = max(0.0, 1.0 - margin)
        norm = squared_norm(features)
        if loss == 0.0 or norm == 0.0:
            return

        tau = loss / norm
        for k, v in features.items():
            weights[k] = weights.get(k, 0.0) + tau * label * v

        self.regularize(weights, features.keys(), self.learning_rate)
