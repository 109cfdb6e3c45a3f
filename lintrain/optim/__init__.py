from .base import LearningRateSchedule, Optimizer, OptimizerParams, Regularization
from .registry import build_optimizer

__all__ = [
    "LearningRateSchedule",
    "Optimizer",
    "OptimizerParams",
    "Regularization",
    "build_optimizer",
]
