# lintrain/training/strategies/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from itertools import islice
from typing import Iterable, Iterator, List, Sequence

import numpy as np

from lintrain.data.instance import LabeledInstance
from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.sampling.sampling_policy import SamplingPolicy


class TrainingStrategy(ABC):
    """
    TrainingStrategy (abstract)

    Contract:
    - consume(instances, model) -> model
    - queries the SamplingPolicy once per example; keep/drop is decided here
    - each sub-model is updated by one sequential stream at a time
    """

    def __init__(
        self,
        sampling: SamplingPolicy,
        iters: int = 1,
        mini_batch_size: int = 1,
        seed: int = 0,
    ):
        self.sampling = sampling
        self.iters = iters
        self.mini_batch_size = mini_batch_size
        self.seed = seed

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def consume(
        self,
        instances: Iterable[LabeledInstance],
        model: MulticlassLinearModel,
    ) -> MulticlassLinearModel:
        ...

    # --------------------------------------------------
    # helpers
    # --------------------------------------------------
    @staticmethod
    def _replayable(instances: Iterable[LabeledInstance]) -> Sequence[LabeledInstance]:
        if isinstance(instances, Sequence):
            return instances
        return list(instances)

    def _sample(
        self,
        instances: Iterable[LabeledInstance],
        rng: np.random.Generator,
    ) -> Iterator[LabeledInstance]:
        for inst in instances:
            p = self.sampling.resolve(inst.label)
            if p >= 1.0 or rng.random() < p:
                yield inst

    def _batches(self, instances: Iterable[LabeledInstance]) -> Iterator[List[LabeledInstance]]:
        it = iter(instances)
        while True:
            batch = list(islice(it, self.mini_batch_size))
            if not batch:
                return
            yield batch

    def _apply(
        self,
        model: MulticlassLinearModel,
        instances: Iterable[LabeledInstance],
        rng: np.random.Generator,
    ) -> int:
        """
        One sequential pass, one model update per mini-batch.
        Returns how many examples were applied.
        """
        applied = 0
        for batch in self._batches(self._sample(instances, rng)):
            model.update_batch(batch)
            applied += len(batch)
        return applied
