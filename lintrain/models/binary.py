# lintrain/models/binary.py
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from lintrain.config.trainer_config import MAX_PERIOD, ModelFamily
from lintrain.optim.base import Example, Optimizer


@dataclass(frozen=True)
class TruncationParams:
    """
    Gradient truncation, fired after every `period`-th update:
    shrink every weight toward zero by `alpha`, then zero those
    with magnitude below `threshold`.
    """

    period: int = MAX_PERIOD
    alpha: float = 0.0
    threshold: float = 0.0

    @classmethod
    def from_config(cls, cfg) -> "TruncationParams":
        return cls(period=cfg.period, alpha=cfg.alpha, threshold=cfg.thresh)


class BinaryLinearModel(ABC):
    """
    BinaryLinearModel (per class, one-vs-all)

    - sparse weights: feature -> coefficient, absent == 0.0
    - owns exactly one optimizer
    - labels are +1 / -1
    """

    family: ModelFamily

    def __init__(self, optimizer: Optimizer, truncation: TruncationParams | None = None):
        self.optimizer = optimizer
        self.truncation = truncation if truncation is not None else TruncationParams()
        self.weights: Dict[str, float] = {}
        self.updates = 0

    # --------------------------------------------------
    # loss
    # --------------------------------------------------
    @abstractmethod
    def loss(self, margin: float) -> float:
        ...

    @abstractmethod
    def loss_derivative(self, margin: float) -> float:
        """d(loss) / d(margin)"""

    # --------------------------------------------------
    # inference
    # --------------------------------------------------
    def weight(self, feature: str) -> float:
        return self.weights.get(feature, 0.0)

    def score(self, features: Mapping[str, float]) -> float:
        w = self.weights
        return sum(w.get(k, 0.0) * v for k, v in features.items())

    def predict(self, features: Mapping[str, float]) -> float:
        return self.score(features)

    # --------------------------------------------------
    # training
    # --------------------------------------------------
    def update(self, features: Mapping[str, float], label: int) -> None:
        self.update_batch([(features, label)])

    def update_batch(self, examples: Sequence[Tuple[Mapping[str, float], int]]) -> None:
        """
        One update from a mini-batch: margins and gradients are all taken
        against the weights before the batch, then applied as one step.
        """
        if not examples:
            return

        batch: List[Example] = [self._example(x, y) for x, y in examples]
        self.optimizer.step_batch(self.weights, batch)
        self.updates += 1

        if self.updates % self.truncation.period == 0:
            self.truncate()

    def _example(self, features: Mapping[str, float], label: int) -> Example:
        if label not in (1, -1):
            raise ValueError(f"binary label must be +1 or -1, got {label!r}")

        margin = label * self.score(features)
        scale = self.loss_derivative(margin)

        if scale != 0.0:
            gradient = {k: scale * label * v for k, v in features.items() if v != 0.0}
        else:
            gradient = {}
        return features, gradient, label, margin

    def truncate(self) -> None:
        alpha = self.truncation.alpha
        threshold = self.truncation.threshold

        kept: Dict[str, float] = {}
        for k, w in self.weights.items():
            if w > 0.0:
                w = max(0.0, w - alpha)
            elif w < 0.0:
                w = min(0.0, w + alpha)
            if w != 0.0 and abs(w) >= threshold:
                kept[k] = w
        self.weights = kept

    # --------------------------------------------------
    # finalization
    # --------------------------------------------------
    def threshold_parameters(self, threshold: float) -> int:
        """Zero coefficients below `threshold` in magnitude; returns how many."""
        before = len(self.weights)
        self.weights = {k: w for k, w in self.weights.items() if w != 0.0 and abs(w) >= threshold}
        return before - len(self.weights)

    def teardown(self) -> None:
        self.optimizer.teardown()

    def serialize(self) -> Dict[str, Any]:
        return {
            "family": self.family.value,
            "weights": dict(self.weights),
            "updates": self.updates,
            "truncation": asdict(self.truncation),
            "optimizer": self.optimizer.describe(),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(optimizer={self.optimizer.family.value}, "
            f"nonzero={len(self.weights)}, updates={self.updates})"
        )


class HingeModel(BinaryLinearModel):
    """
    Hinge loss max(0, threshold - margin).

    threshold 0 → perceptron, threshold 1 → linear SVM.
    """

    def __init__(
        self,
        optimizer: Optimizer,
        truncation: TruncationParams | None = None,
        threshold: float = 1.0,
    ):
        super().__init__(optimizer, truncation)
        self.threshold = threshold
        self.family = ModelFamily.PERCEPTRON if threshold == 0.0 else ModelFamily.LINEAR_SVM

    def loss(self, margin: float) -> float:
        return max(0.0, self.threshold - margin)

    def loss_derivative(self, margin: float) -> float:
        # 含等号：零权重的 perceptron 也要更新
        return -1.0 if margin <= self.threshold else 0.0

    def serialize(self) -> Dict[str, Any]:
        return {**super().serialize(), "threshold": self.threshold}


class LogisticRegressionModel(BinaryLinearModel):
    family = ModelFamily.LOGISTIC_REGRESSION

    def loss(self, margin: float) -> float:
        if margin > 0:
            return math.log1p(math.exp(-margin))
        return -margin + math.log1p(math.exp(margin))

    def loss_derivative(self, margin: float) -> float:
        return -_sigmoid(-margin)

    def predict(self, features: Mapping[str, float]) -> float:
        """P(label == +1)"""
        return _sigmoid(self.score(features))


class MIRAModel(BinaryLinearModel):
    """
    Margin model for the MIRA optimizer: unit-margin hinge.
    The step size is decided by the optimizer from the margin alone.
    """

    family = ModelFamily.MIRA

    def loss(self, margin: float) -> float:
        return max(0.0, 1.0 - margin)

    def loss_derivative(self, margin: float) -> float:
        return -1.0 if margin < 1.0 else 0.0


def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)
