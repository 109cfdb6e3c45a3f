# lintrain/optim/ftrl.py
from __future__ import annotations

import math
from typing import Dict, Mapping

from lintrain.config.trainer_config import OptimizerFamily
from lintrain.optim.base import Optimizer, OptimizerParams


class FTRLOptimizer(Optimizer):
    """
    FTRL-Proximal (McMahan et al. 2013).

    Per-coordinate state z, n. Rates come from alpha / beta, the laplace
    and gauss weights act as lambda1 / lambda2. The shared schedule is
    carried but does not scale the step.
    """

    family = OptimizerFamily.FTRL

    def __init__(self, params: OptimizerParams):
        super().__init__(params)
        self.alpha = float(params.family_params.get("ftrl_alpha", 1.0))
        self.beta = float(params.family_params.get("ftrl_beta", 1.0))
        self.z: Dict[str, float] = {}
        self.n: Dict[str, float] = {}

    def _apply(
        self,
        weights: Dict[str, float],
        features: Mapping[str, float],
        gradient: Mapping[str, float],
        label: int,
        margin: float,
    ) -> None:
        l1 = self.regularization.laplace
        l2 = self.regularization.gauss

        for k, g in gradient.items():
            w = weights.get(k, 0.0)
            if k not in self.n and w != 0.0:
                self.z[k] = self._warm_z(w)

            n_old = self.n.get(k, 0.0)
            n_new = n_old + g * g
            sigma = (math.sqrt(n_new) - math.sqrt(n_old)) / self.alpha
            z = self.z.get(k, 0.0) + g - sigma * w

            self.z[k] = z
            self.n[k] = n_new

            if abs(z) <= l1:
                weights.pop(k, None)
            else:
                sign = 1.0 if z > 0.0 else -1.0
                weights[k] = -(z - sign * l1) / ((self.beta + math.sqrt(n_new)) / self.alpha + l2)

    def _warm_z(self, w: float) -> float:
        """
        z that reproduces weight w with n == 0, for coordinates that carry a
        weight but no state (reopened after teardown, or averaged in a merge).
        """
        sign = 1.0 if w > 0.0 else -1.0
        return -w * (self.beta / self.alpha + self.regularization.gauss) - sign * self.regularization.laplace

    def teardown(self) -> None:
        self.z.clear()
        self.n.clear()

    def describe(self):
        return {**super().describe(), "ftrl_alpha": self.alpha, "ftrl_beta": self.beta}
