# lintrain/models/registry.py
from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from lintrain.config.trainer_config import ModelFamily
from lintrain.models.binary import (
    BinaryLinearModel,
    HingeModel,
    LogisticRegressionModel,
    MIRAModel,
    TruncationParams,
)
from lintrain.optim.base import Optimizer
from lintrain.utils.errors import ConfigurationError

_MODEL_REGISTRY: Dict[
    ModelFamily,
    Callable[[Optimizer, TruncationParams], BinaryLinearModel],
] = {
    ModelFamily.PERCEPTRON: partial(HingeModel, threshold=0.0),
    ModelFamily.LINEAR_SVM: partial(HingeModel, threshold=1.0),
    ModelFamily.LOGISTIC_REGRESSION: LogisticRegressionModel,
    ModelFamily.MIRA: MIRAModel,
}


def build_binary_model(
    family: ModelFamily | str,
    optimizer: Optimizer,
    truncation: TruncationParams | None = None,
) -> BinaryLinearModel:
    """
    Bind one optimizer to one new binary model of `family`.
    Truncation is independent of the family.
    """
    try:
        key = ModelFamily(family)
    except ValueError:
        available = ", ".join(f.value for f in _MODEL_REGISTRY)
        raise ConfigurationError(
            f"unknown model {family!r}. Available: {available}"
        ) from None

    return _MODEL_REGISTRY[key](optimizer, truncation or TruncationParams())
