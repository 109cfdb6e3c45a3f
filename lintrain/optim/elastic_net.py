# lintrain/optim/elastic_net.py
from __future__ import annotations

from typing import Dict, Mapping

from lintrain.config.trainer_config import OptimizerFamily
from lintrain.optim.base import Optimizer


class ElasticNetOptimizer(Optimizer):
    """
    Plain SGD with L1 + L2 shrinkage on the scheduled learning rate.
    """

    family = OptimizerFamily.ELASTIC_NET

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
            weights[k] = weights.get(k, 0.0) - rate * g

        self.regularize(weights, features.keys(), rate)
