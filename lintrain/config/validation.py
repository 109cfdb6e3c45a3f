# lintrain/config/validation.py
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Tuple

from lintrain.config.trainer_config import ModelFamily, OptimizerFamily, TrainerConfig
from lintrain.utils.errors import ConfigurationError
from lintrain.utils.logger import logs

# model family → optimizer families it may be paired with
# 未登记的 model family 可以搭配任意 optimizer
_COMPATIBLE_OPTIMIZERS: Dict[ModelFamily, FrozenSet[OptimizerFamily]] = {
    ModelFamily.MIRA: frozenset({OptimizerFamily.MIRA}),
}


def check_model_optimizer(model: ModelFamily, optimizer: OptimizerFamily) -> None:
    allowed = _COMPATIBLE_OPTIMIZERS.get(model)
    if allowed is not None and optimizer not in allowed:
        names = ", ".join(sorted(o.value for o in allowed))
        raise ConfigurationError(
            f"model {model.value!r} only works with optimizer(s) {names}, "
            f"got {optimizer.value!r}"
        )


def check_categories(categories: Iterable[str]) -> Tuple[str, ...]:
    cats = tuple(categories)

    if not cats:
        raise ConfigurationError("categories must not be empty")

    seen = set()
    dupes = []
    for c in cats:
        if not isinstance(c, str):
            raise ConfigurationError(f"category labels must be str, got {c!r}")
        if c in seen:
            dupes.append(c)
        seen.add(c)

    if dupes:
        raise ConfigurationError(f"duplicate categories: {sorted(set(dupes))}")

    return cats


def validate_config(cfg: TrainerConfig, categories: Iterable[str]) -> Tuple[str, ...]:
    """
    Fail-fast validation run at trainer construction.

    Returns the category set as an ordered tuple.
    """
    try:
        check_model_optimizer(cfg.model, cfg.optimizer)
        cats = check_categories(categories)
    except ConfigurationError as e:
        logs.error(f"[Validator] {e}")
        raise

    logs.debug(
        f"[Validator] ok model={cfg.model.value} "
        f"optimizer={cfg.optimizer.value} categories={len(cats)}"
    )
    return cats
