# lintrain/optim/registry.py
from __future__ import annotations

from typing import Callable, Dict

from lintrain.config.trainer_config import OptimizerFamily
from lintrain.optim.adagrad import AdagradOptimizer
from lintrain.optim.base import Optimizer, OptimizerParams
from lintrain.optim.elastic_net import ElasticNetOptimizer
from lintrain.optim.ftrl import FTRLOptimizer
from lintrain.optim.mira import MIRAOptimizer
from lintrain.optim.passive_aggressive import PassiveAggressiveOptimizer
from lintrain.utils.errors import ConfigurationError

# 注册表集中、静态；新增 optimizer 只在这里登记
_OPTIMIZER_REGISTRY: Dict[OptimizerFamily, Callable[[OptimizerParams], Optimizer]] = {
    OptimizerFamily.ELASTIC_NET: ElasticNetOptimizer,
    OptimizerFamily.ADAGRAD: AdagradOptimizer,
    OptimizerFamily.PASSIVE_AGGRESSIVE: PassiveAggressiveOptimizer,
    OptimizerFamily.FTRL: FTRLOptimizer,
    OptimizerFamily.MIRA: MIRAOptimizer,
}


def build_optimizer(family: OptimizerFamily | str, params: OptimizerParams) -> Optimizer:
    """
    Build ONE new optimizer. Never pooled, never shared.
    """
    try:
        key = OptimizerFamily(family)
    except ValueError:
        available = ", ".join(f.value for f in _OPTIMIZER_REGISTRY)
        raise ConfigurationError(
            f"unknown optimizer {family!r}. Available: {available}"
        ) from None

    return _OPTIMIZER_REGISTRY[key](params)
