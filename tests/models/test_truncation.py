#!filepath: tests/models/test_truncation.py
import pytest

from lintrain.models import TruncationParams, build_binary_model
from lintrain.optim import OptimizerParams, build_optimizer


def _svm(trunc):
    return build_binary_model("linear_svm", build_optimizer("elastic_net", OptimizerParams()), trunc)


def test_small_coefficient_is_zero_right_after_truncation():
    m = _svm(TruncationParams(period=2, alpha=0.0, threshold=0.5))

    m.update({"a": 1.0, "b": 10.0}, 1)
    # 第一次更新后尚未触发 truncation
    assert m.weight("a") == pytest.approx(0.1)
    assert m.weight("b") == pytest.approx(1.0)

    # margin > 1: no gradient, but the 2nd update fires truncation
    m.update({"a": 1.0, "b": 10.0}, 1)

    assert m.weight("a") == 0.0
    assert "a" not in m.weights
    assert m.weight("b") == pytest.approx(1.0)


def test_truncation_shrinks_by_alpha():
    m = _svm(TruncationParams(period=1, alpha=0.05, threshold=0.0))

    m.update({"a": 1.0, "b": 10.0}, 1)

    assert m.weight("a") == pytest.approx(0.05)
    assert m.weight("b") == pytest.approx(0.95)


def test_default_period_never_fires_in_practice():
    m = _svm(TruncationParams(threshold=0.5))

    for _ in range(3):
        m.update({"a": 1.0}, 1)

    assert 0.0 < m.weight("a") < 0.5


def test_threshold_parameters_counts_dropped():
    m = _svm(TruncationParams())
    m.weights = {"a": 0.01, "b": -0.02, "c": 0.5}

    dropped = m.threshold_parameters(0.1)

    assert dropped == 2
    assert m.weights == {"c": 0.5}
