# lintrain/training/assembler.py
from __future__ import annotations

from typing import Dict, Sequence

from lintrain.config.trainer_config import TrainerConfig
from lintrain.models.binary import BinaryLinearModel, TruncationParams
from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.models.registry import build_binary_model
from lintrain.optim.base import OptimizerParams
from lintrain.optim.registry import build_optimizer
from lintrain.utils.errors import ModelStateError
from lintrain.utils.logger import logs


def assemble_multiclass_model(
    cfg: TrainerConfig,
    categories: Sequence[str],
) -> MulticlassLinearModel:
    """
    One-vs-all assembly.

    Contract:
    - one fresh optimizer + one fresh binary model per category
    - hyperparameters shared, state never shared
    - key set of the result == categories
    """
    params = OptimizerParams.from_config(cfg)
    truncation = TruncationParams.from_config(cfg)

    submodels: Dict[str, BinaryLinearModel] = {}
    for label in categories:
        optimizer = build_optimizer(cfg.optimizer, params)
        submodels[label] = build_binary_model(cfg.model, optimizer, truncation)

    model = MulticlassLinearModel(submodels, model_type=cfg.model.value)

    if set(model.categories) != set(categories) or len(model) != len(categories):
        raise ModelStateError(
            f"assembled labels {sorted(model.categories)} "
            f"do not match categories {sorted(categories)}"
        )

    logs.debug(
        f"[Assembler] model={cfg.model.value} optimizer={cfg.optimizer.value} "
        f"categories={len(model)}"
    )
    return model
