# lintrain/training/postprocess.py
from __future__ import annotations

from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.utils.errors import ModelStateError
from lintrain.utils.logger import logs


def finalize(
    model: MulticlassLinearModel,
    threshold: float,
    config_string: str,
) -> MulticlassLinearModel:
    """
    Run once, after the training strategy returns:
    threshold coefficients, stamp the configuration, tear down.
    """
    if model.finalized:
        raise ModelStateError("model already finalized")

    dropped = model.threshold_parameters(threshold)
    model.set_arg_string(config_string)
    model.teardown()

    logs.info(
        f"[PostProcess] finalized {model.model_type} "
        f"threshold={threshold} dropped={dropped} nonzero={model.nonzero_counts()}"
    )
    return model
