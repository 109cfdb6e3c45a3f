# lintrain/optim/passive_aggressive.py
from __future__ import annotations

from typing import Dict, Mapping

from lintrain.config.trainer_config import OptimizerFamily
from lintrain.optim.base import (
    Optimizer,
    OptimizerParams,
    hinge_aggregate,
    squared_norm,
)


class PassiveAggressiveOptimizer(Optimizer):
    """
    PA-I update, always in hinge mode:

        loss = max(0, 1 - margin)
        tau  = min(C, loss / ||x||^2)
        w   += tau * y * x
    """

    family = OptimizerFamily.PASSIVE_AGGRESSIVE

    def __init__(self, params: OptimizerParams):
        super().__init__(params)
        self.c = float(params.family_params.get("aggressiveness", 2.0))
        self.hinge = True

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
        if loss > 0.0 and norm > 0.0:
            tau = min(self.c, loss / norm)
            for k, v in features.items():
                weights[k] = weights.get(k, 0.0) + tau * label * v

        self.regularize(weights, features.keys(), self.learning_rate)

    def describe(self):
        return {**super().describe(), "aggressiveness": self.c, "hinge": self.hinge}
