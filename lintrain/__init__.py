#!filepath: lintrain/__init__.py

from .utils.logger import Logging, logs
from .config import AppConfig, TrainerConfig
from .data import LabeledInstance
from .training import MulticlassModelTrainer

__all__ = [
    "logs", "Logging",
    "AppConfig",
    "TrainerConfig",
    "LabeledInstance",
    "MulticlassModelTrainer",
]

__version__ = "0.1.0"
