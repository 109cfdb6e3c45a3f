# lintrain/models/multiclass.py
from __future__ import annotations

import copy
from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple

from lintrain.data.instance import LabeledInstance
from lintrain.models.binary import BinaryLinearModel
from lintrain.utils.errors import ModelStateError


class MulticlassLinearModel:
    """
    MulticlassLinearModel（one-vs-all）

    Semantics:
    - label -> BinaryLinearModel, key set == category set
    - every sub-model owns its own optimizer (no sharing)
    - an instance is +1 for its own label, -1 for every other label
    - finalized models are read-only
    """

    def __init__(self, submodels: Mapping[str, BinaryLinearModel], model_type: str = ""):
        self._submodels: Dict[str, BinaryLinearModel] = dict(submodels)
        self.model_type = model_type
        self.arg_string = ""
        self.finalized = False

    # --------------------------------------------------
    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._submodels)

    def submodel(self, label: str) -> BinaryLinearModel:
        return self._submodels[label]

    def items(self) -> Iterator[Tuple[str, BinaryLinearModel]]:
        return iter(self._submodels.items())

    def __len__(self) -> int:
        return len(self._submodels)

    def __contains__(self, label: object) -> bool:
        return label in self._submodels

    # --------------------------------------------------
    # training
    # --------------------------------------------------
    def update(self, instance: LabeledInstance) -> None:
        self.update_batch([instance])

    def update_batch(self, instances: Sequence[LabeledInstance]) -> None:
        """
        One update per sub-model for the whole mini-batch.
        """
        if self.finalized:
            raise ModelStateError("cannot update a finalized model")
        if not instances:
            return

        # 不在类别集合中的 label：对所有子模型都是负例
        for label, model in self._submodels.items():
            model.update_batch(
                [(inst.features, 1 if label == inst.label else -1) for inst in instances]
            )

    # --------------------------------------------------
    # inference
    # --------------------------------------------------
    def scores(self, features: Mapping[str, float]) -> Dict[str, float]:
        return {label: m.score(features) for label, m in self._submodels.items()}

    def predict(self, features: Mapping[str, float]) -> str:
        scores = self.scores(features)
        return max(scores, key=scores.__getitem__)

    # --------------------------------------------------
    # finalization
    # --------------------------------------------------
    def threshold_parameters(self, threshold: float) -> int:
        return sum(m.threshold_parameters(threshold) for m in self._submodels.values())

    def set_arg_string(self, arg_string: str) -> None:
        self.arg_string = arg_string

    def teardown(self) -> None:
        for m in self._submodels.values():
            m.teardown()
        self.finalized = True

    def reopen(self) -> "MulticlassLinearModel":
        """
        Trainable copy of a finalized model (weights kept,
        optimizer accumulators start empty after teardown;
        ftrl re-derives z from the kept weights on first touch).
        """
        clone = copy.deepcopy(self)
        clone.finalized = False
        return clone

    def copy(self) -> "MulticlassLinearModel":
        return copy.deepcopy(self)

    # --------------------------------------------------
    def nonzero_counts(self) -> Dict[str, int]:
        return {label: len(m.weights) for label, m in self._submodels.items()}

    def serialize(self) -> Dict[str, Any]:
        return {
            "model_type": self.model_type,
            "arg_string": self.arg_string,
            "finalized": self.finalized,
            "submodels": {label: m.serialize() for label, m in self._submodels.items()},
        }

    def __repr__(self) -> str:
        return (
            f"MulticlassLinearModel(model_type={self.model_type!r}, "
            f"categories={list(self.categories)}, finalized={self.finalized})"
        )
