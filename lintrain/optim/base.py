# lintrain/optim/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

from lintrain.config.trainer_config import OptimizerFamily

# (features, gradient, label, margin) of one example, margin taken before the batch
Example = Tuple[Mapping[str, float], Mapping[str, float], int, float]


@dataclass(frozen=True)
class LearningRateSchedule:
    """
    Learning-rate schedule over a continuous epoch.

        epoch = examples_seen / examples_per_epoch

    - exponential: initial_rate * base ** epoch
    - otherwise:   initial_rate / (1 + epoch)
    """

    initial_rate: float = 0.1
    examples_per_epoch: float = 10000.0
    use_exponential: bool = False
    exponential_base: float = 1.0

    def epoch(self, examples_seen: float) -> float:
        return examples_seen / self.examples_per_epoch

    def rate(self, examples_seen: float) -> float:
        e = self.epoch(examples_seen)
        if self.use_exponential:
            return self.initial_rate * self.exponential_base ** e
        return self.initial_rate / (1.0 + e)


@dataclass(frozen=True)
class Regularization:
    laplace: float = 0.0  # L1
    gauss: float = 0.0  # L2


@dataclass(frozen=True)
class OptimizerParams:
    """
    Everything an optimizer is built from, passed wholesale.

    family_params holds the family-specific knobs
    (aggressiveness for passive_aggressive, alpha / beta for ftrl).
    """

    regularization: Regularization = field(default_factory=Regularization)
    schedule: LearningRateSchedule = field(default_factory=LearningRateSchedule)
    family_params: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def from_config(cls, cfg) -> "OptimizerParams":
        return cls(
            regularization=Regularization(laplace=cfg.laplace, gauss=cfg.gauss),
            schedule=LearningRateSchedule(
                initial_rate=cfg.rate,
                examples_per_epoch=cfg.examples_per_epoch,
                use_exponential=cfg.use_exponential_learning_rate,
                exponential_base=cfg.exponential_learning_rate_base,
            ),
            family_params={
                "aggressiveness": cfg.aggressiveness,
                "ftrl_alpha": cfg.ftrl_alpha,
                "ftrl_beta": cfg.ftrl_beta,
            },
        )


class Optimizer(ABC):
    """
    Optimizer (per binary model, never shared)

    Contract:
    - built fully configured from OptimizerParams
    - step() mutates the owning model's weight dict in place
    - one example or one aggregated mini-batch per step;
      examples_seen counts steps and drives the schedule
    """

    family: OptimizerFamily

    def __init__(self, params: OptimizerParams):
        self.params = params
        self.examples_seen = 0

    # --------------------------------------------------
    @property
    def regularization(self) -> Regularization:
        return self.params.regularization

    @property
    def schedule(self) -> LearningRateSchedule:
        return self.params.schedule

    @property
    def learning_rate(self) -> float:
        return self.schedule.rate(self.examples_seen)

    # --------------------------------------------------
    def step(
        self,
        weights: Dict[str, float],
        features: Mapping[str, float],
        gradient: Mapping[str, float],
        label: int,
        margin: float,
    ) -> None:
        """
        Apply one example.

        gradient: d(loss)/d(w) of the model's own loss, nonzero entries only
        label:    +1 / -1
        margin:   label * <w, x> before the update
        """
        self._apply(weights, features, gradient, label, margin)
        self.examples_seen += 1

    def step_batch(self, weights: Dict[str, float], batch: Sequence[Example]) -> None:
        """
        Apply a mini-batch as a single step.

        A batch of one is exactly step(); larger batches are folded by
        aggregate() first, so the schedule advances once per batch.
        """
        if not batch:
            return
        if len(batch) == 1:
            self.step(weights, *batch[0])
            return
        self.step(weights, *self.aggregate(batch))

    def aggregate(self, batch: Sequence[Example]) -> Example:
        """
        Gradient families: sum the per-example gradients.
        features is the summed input, only its keys are used (regularization).
        """
        features: Dict[str, float] = {}
        gradient: Dict[str, float] = {}
        for x, g, _, _ in batch:
            for k, v in x.items():
                features[k] = features.get(k, 0.0) + v
            for k, v in g.items():
                gradient[k] = gradient.get(k, 0.0) + v
        margin = sum(m for _, _, _, m in batch) / len(batch)
        return features, gradient, 1, margin

    @abstractmethod
    def _apply(
        self,
        weights: Dict[str, float],
        features: Mapping[str, float],
        gradient: Mapping[str, float],
        label: int,
        margin: float,
    ) -> None:
        ...

    # --------------------------------------------------
    def regularize(self, weights: Dict[str, float], keys: Iterable[str], rate: float) -> None:
        """
        Lazy elastic-net shrinkage on the touched coordinates:
        L2 scales toward zero, L1 clips toward zero without crossing it.
        """
        gauss = self.regularization.gauss
        laplace = self.regularization.laplace
        if gauss == 0.0 and laplace == 0.0:
            return

        l2 = max(0.0, 1.0 - rate * gauss)
        l1 = rate * laplace
        for k in keys:
            w = weights.get(k)
            if w is None:
                continue
            w *= l2
            if w > 0.0:
                w = max(0.0, w - l1)
            elif w < 0.0:
                w = min(0.0, w + l1)

            if w == 0.0:
                del weights[k]
            else:
                weights[k] = w

    def teardown(self) -> None:
        """Drop per-coordinate state once training is over."""

    def describe(self) -> Dict[str, Any]:
        return {
            "family": self.family.value,
            "examples_seen": self.examples_seen,
            "laplace": self.regularization.laplace,
            "gauss": self.regularization.gauss,
            "initial_rate": self.schedule.initial_rate,
            "examples_per_epoch": self.schedule.examples_per_epoch,
            "use_exponential": self.schedule.use_exponential,
            "exponential_base": self.schedule.exponential_base,
        }


def squared_norm(features: Mapping[str, float]) -> float:
    return sum(v * v for v in features.values())


def hinge_aggregate(batch: Sequence[Example]) -> Example:
    """
    Fold a batch for the margin families (passive_aggressive, mira).

    direction = sum of y * x over unit-margin violators
    loss      = summed hinge loss

    Returned as a single +1 example whose margin is 1 - loss, so the
    per-example rule sees the batch loss and the summed direction.
    """
    direction: Dict[str, float] = {}
    loss = 0.0
    for x, _, y, m in batch:
        hinge = max(0.0, 1.0 - m)
        if hinge == 0.0:
            continue
        loss += hinge
        for k, v in x.items():
            direction[k] = direction.get(k, 0.0) + y * v
    return direction, {}, 1, 1.0 - loss
