from .app_config import AppConfig
from .log_config import LogConfig
from .trainer_config import MAX_PERIOD, ModelFamily, OptimizerFamily, TrainerConfig
from .validation import validate_config

__all__ = [
    "AppConfig",
    "LogConfig",
    "MAX_PERIOD",
    "ModelFamily",
    "OptimizerFamily",
    "TrainerConfig",
    "validate_config",
]
