from .binary import (
    BinaryLinearModel,
    HingeModel,
    LogisticRegressionModel,
    MIRAModel,
    TruncationParams,
)
from .multiclass import MulticlassLinearModel
from .registry import build_binary_model

__all__ = [
    "BinaryLinearModel",
    "HingeModel",
    "LogisticRegressionModel",
    "MIRAModel",
    "MulticlassLinearModel",
    "TruncationParams",
    "build_binary_model",
]
