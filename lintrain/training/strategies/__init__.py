from .base import TrainingStrategy
from .large import LargeModelTrainer
from .small import SmallModelTrainer

__all__ = ["LargeModelTrainer", "SmallModelTrainer", "TrainingStrategy"]
