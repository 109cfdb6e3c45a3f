# lintrain/training/strategies/large.py
from __future__ import annotations

from typing import Dict, Iterable, List

import numpy as np

from lintrain.data.instance import LabeledInstance
from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.sampling.sampling_policy import SamplingPolicy
from lintrain.training.strategies.base import TrainingStrategy
from lintrain.utils.logger import logs


class LargeModelTrainer(TrainingStrategy):
    """
    Partitioned training with parameter averaging.

    Per iteration:
    1. split the stream round-robin into `bins` partitions
    2. one sequential pass per partition on its own copy of the model
    3. merge: average each sub-model's weights over non-empty partitions

    Optimizer accumulators of the merged model come from the model the
    iteration started with; example counters add up.
    """

    def __init__(
        self,
        sampling: SamplingPolicy,
        bins: int = 100,
        iters: int = 1,
        mini_batch_size: int = 1,
        seed: int = 0,
    ):
        super().__init__(sampling, iters=iters, mini_batch_size=mini_batch_size, seed=seed)
        self.bins = bins

    def consume(
        self,
        instances: Iterable[LabeledInstance],
        model: MulticlassLinearModel,
    ) -> MulticlassLinearModel:
        data = list(instances)
        rng = np.random.default_rng(self.seed)

        for it in range(self.iters):
            partials: List[MulticlassLinearModel] = []
            applied = 0

            for b in range(self.bins):
                part = data[b :: self.bins]
                if not part:
                    continue
                local = model.copy()
                applied += self._apply(local, part, rng)
                partials.append(local)

            if partials:
                model = self.merge(model, partials)

            logs.info(
                f"[{self.name}] iter={it + 1}/{self.iters} "
                f"partitions={len(partials)} applied={applied}"
            )

        return model

    @staticmethod
    def merge(
        base: MulticlassLinearModel,
        partials: List[MulticlassLinearModel],
    ) -> MulticlassLinearModel:
        merged = base.copy()
        n = len(partials)

        for label, sub in merged.items():
            start_seen = base.submodel(label).optimizer.examples_seen
            start_updates = base.submodel(label).updates

            acc: Dict[str, float] = {}
            seen = start_seen
            updates = start_updates
            for p in partials:
                local = p.submodel(label)
                for k, w in local.weights.items():
                    acc[k] = acc.get(k, 0.0) + w / n
                seen += local.optimizer.examples_seen - start_seen
                updates += local.updates - start_updates

            sub.weights = {k: w for k, w in acc.items() if w != 0.0}
            sub.optimizer.examples_seen = seen
            sub.updates = updates

        return merged
