# lintrain/config/trainer_config.py
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lintrain.utils.errors import ConfigurationError
from lintrain.utils.logger import logs

# Int.MaxValue：默认 period 等价于关闭 truncation
MAX_PERIOD = 2**31 - 1

_TRUTHY = {"", "true", "1", "yes", "y", "on"}
_FALSY = {"false", "0", "no", "n", "off"}


class ModelFamily(str, Enum):
    PERCEPTRON = "perceptron"
    LINEAR_SVM = "linear_svm"
    LOGISTIC_REGRESSION = "logistic_regression"
    MIRA = "mira"


class OptimizerFamily(str, Enum):
    ELASTIC_NET = "elastic_net"
    ADAGRAD = "adagrad"
    PASSIVE_AGGRESSIVE = "passive_aggressive"
    FTRL = "ftrl"
    MIRA = "mira"


class TrainerConfig(BaseModel):
    """
    TrainerConfig（FINAL / FROZEN）

    Semantics:
    - Fully resolved hyperparameters of one trainer
    - Every field has the documented default
    - Immutable once constructed; downstream only reads

    Field ranges are checked here. Cross-parameter constraints live in
    lintrain.config.validation and run at trainer construction.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    # passes
    iters: int = Field(1, ge=1)

    # families
    model: ModelFamily = ModelFamily.LOGISTIC_REGRESSION
    optimizer: OptimizerFamily = OptimizerFamily.ELASTIC_NET

    # passive aggressive
    aggressiveness: float = Field(2.0, gt=0.0)

    # post-training thresholding
    final_thresholding: float = Field(0.0, ge=0.0)

    # learning rate schedule
    rate: float = Field(0.1, gt=0.0)
    exponential_learning_rate_base: float = Field(1.0, gt=0.0)
    use_exponential_learning_rate: bool = False
    examples_per_epoch: float = Field(10000.0, gt=0.0)

    # regularization
    laplace: float = Field(0.0, ge=0.0)
    gauss: float = Field(0.0, ge=0.0)

    # gradient truncation
    period: int = Field(MAX_PERIOD, ge=1)
    alpha: float = Field(0.0, ge=0.0)
    thresh: float = Field(0.0, ge=0.0)

    # FTRL
    ftrl_alpha: float = Field(1.0, alias="ftrlAlpha", gt=0.0)
    ftrl_beta: float = Field(1.0, alias="ftrlBeta", ge=0.0)

    # class sampling overrides
    class_probs: Optional[str] = None
    class_prob_file: Optional[Path] = None

    # strategy dispatch
    bins: int = Field(100, ge=1)
    large: bool = False
    mini_batch_size: int = Field(1, ge=1)
    seed: int = 0

    # --------------------------------------------------
    @classmethod
    def option_names(cls) -> list[str]:
        """Public option names (aliases where a field has one)."""
        return [f.alias or name for name, f in cls.model_fields.items()]

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "TrainerConfig":
        """
        Resolve raw user options (CLI / job args) into a TrainerConfig.

        - absent option → documented default
        - `large` is a flag: present without value means True
        - presence of `exponential_learning_rate_base` switches on the
          exponential schedule; a bare flag keeps base 1.0
        - options not known to the trainer are ignored (job-level args)
        """
        known = set(cls.option_names())
        resolved: Dict[str, Any] = {}

        for key, value in args.items():
            if key == "use_exponential_learning_rate" or key not in known:
                logs.debug(f"[TrainerConfig] ignore option {key!r}")
                continue

            if key == "large":
                resolved["large"] = _parse_flag(key, value)
                continue

            if key == "exponential_learning_rate_base":
                resolved["use_exponential_learning_rate"] = True
                if isinstance(value, str) and value.strip().lower() in _TRUTHY:
                    continue
                if value is None or value is True:
                    continue

            if value is None:
                continue

            resolved[key] = value.strip() if isinstance(value, str) else value

        try:
            cfg = cls.model_validate(resolved)
        except ValidationError as e:
            logs.error(f"[TrainerConfig] invalid options: {e}")
            raise ConfigurationError(f"invalid trainer options: {e}") from e

        return cfg

    # --------------------------------------------------
    def to_arg_string(self) -> str:
        """
        Deterministic `--key value` rendering of the resolved options,
        stamped on trained models for reproducibility.

        Parsing the stamp back through from_args gives an equal config:
        the schedule mode is carried only by the presence of
        `exponential_learning_rate_base`.
        """
        exclude = {"use_exponential_learning_rate"}
        if not self.use_exponential_learning_rate:
            exclude.add("exponential_learning_rate_base")

        parts = []
        for key, value in self.model_dump(by_alias=True, exclude=exclude).items():
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            if isinstance(value, bool):
                if value:
                    parts.append(f"--{key}")
                continue
            parts.append(f"--{key} {value}")
        return " ".join(parts)


def _parse_flag(key: str, value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return True if value is None else value

    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False

    raise ConfigurationError(f"option {key!r} expects a boolean flag, got {value!r}")
