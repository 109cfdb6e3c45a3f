# lintrain/training/trainer.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Sequence

from lintrain.config.trainer_config import TrainerConfig
from lintrain.config.validation import validate_config
from lintrain.data.instance import LabeledInstance
from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.sampling.sampling_policy import SamplingPolicy
from lintrain.training.assembler import assemble_multiclass_model
from lintrain.training.postprocess import finalize
from lintrain.training.strategies import (
    LargeModelTrainer,
    SmallModelTrainer,
    TrainingStrategy,
)
from lintrain.utils.errors import ConfigurationError
from lintrain.utils.logger import logs


def _small(cfg: TrainerConfig, sampling: SamplingPolicy) -> TrainingStrategy:
    return SmallModelTrainer(
        sampling,
        iters=cfg.iters,
        mini_batch_size=cfg.mini_batch_size,
        seed=cfg.seed,
    )


def _large(cfg: TrainerConfig, sampling: SamplingPolicy) -> TrainingStrategy:
    return LargeModelTrainer(
        sampling,
        bins=cfg.bins,
        iters=cfg.iters,
        mini_batch_size=cfg.mini_batch_size,
        seed=cfg.seed,
    )


# cfg.large -> strategy builder
_STRATEGY_REGISTRY: Dict[bool, Callable[[TrainerConfig, SamplingPolicy], TrainingStrategy]] = {
    False: _small,
    True: _large,
}


class MulticlassModelTrainer:
    """
    MulticlassModelTrainer（FINAL）

    Construction is fail-fast:
    - cross-parameter validation
    - sampling overrides parsed (file read happens here, once)
    - strategy chosen

    Any error aborts construction; no model is ever built from
    an invalid configuration.
    """

    def __init__(
        self,
        cfg: TrainerConfig,
        categories: Sequence[str],
        strategy: Optional[TrainingStrategy] = None,
    ):
        self.cfg = cfg
        self.categories = validate_config(cfg, categories)

        self.sampling = SamplingPolicy.build(
            self.categories,
            class_probs=cfg.class_probs,
            class_prob_file=cfg.class_prob_file,
        )

        self.strategy = strategy if strategy is not None else _STRATEGY_REGISTRY[cfg.large](cfg, self.sampling)

        logs.info(
            f"[MulticlassModelTrainer] model={cfg.model.value} "
            f"optimizer={cfg.optimizer.value} categories={len(self.categories)} "
            f"strategy={self.strategy.name}"
        )

    # --------------------------------------------------
    @property
    def iters(self) -> int:
        return self.cfg.iters

    @property
    def mini_batch_size(self) -> int:
        return self.cfg.mini_batch_size

    def sample_prob(self, label: str) -> float:
        return self.sampling.resolve(label)

    def get_model(self) -> MulticlassLinearModel:
        return assemble_multiclass_model(self.cfg, self.categories)

    def model_post_process(self, model: MulticlassLinearModel) -> MulticlassLinearModel:
        return finalize(model, self.cfg.final_thresholding, self.cfg.to_arg_string())

    # --------------------------------------------------
    @logs.catch("training failed")
    def train(self, instances: Iterable[LabeledInstance]) -> MulticlassLinearModel:
        model = self.get_model()
        model = self.strategy.consume(instances, model)
        return self.model_post_process(model)

    @logs.catch("retraining failed")
    def retrain(
        self,
        instances: Iterable[LabeledInstance],
        model: MulticlassLinearModel,
    ) -> MulticlassLinearModel:
        if set(model.categories) != set(self.categories):
            raise ConfigurationError(
                f"model categories {sorted(model.categories)} "
                f"do not match trainer categories {sorted(self.categories)}"
            )

        working = model.reopen() if model.finalized else model
        working = self.strategy.consume(instances, working)
        return self.model_post_process(working)
