# lintrain/training/strategies/small.py
from __future__ import annotations

from typing import Iterable

import numpy as np

from lintrain.data.instance import LabeledInstance
from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.training.strategies.base import TrainingStrategy
from lintrain.utils.logger import logs


class SmallModelTrainer(TrainingStrategy):
    """
    Single coordinating sequential pass, repeated `iters` times.
    """

    def consume(
        self,
        instances: Iterable[LabeledInstance],
        model: MulticlassLinearModel,
    ) -> MulticlassLinearModel:
        data = self._replayable(instances) if self.iters > 1 else instances
        rng = np.random.default_rng(self.seed)

        for it in range(self.iters):
            applied = self._apply(model, data, rng)
            logs.info(f"[{self.name}] iter={it + 1}/{self.iters} applied={applied}")

        return model
