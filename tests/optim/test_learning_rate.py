#!filepath: tests/optim/test_learning_rate.py
import pytest

from lintrain.optim.base import LearningRateSchedule, OptimizerParams
from lintrain.optim.registry import build_optimizer


def test_exponential_rate_after_one_epoch():
    s = LearningRateSchedule(
        initial_rate=1.0,
        examples_per_epoch=100,
        use_exponential=True,
        exponential_base=0.9,
    )

    assert s.rate(0) == 1.0
    assert s.rate(100) == pytest.approx(0.9)
    assert s.rate(200) == pytest.approx(0.81)


def test_epoch_is_fractional():
    s = LearningRateSchedule(examples_per_epoch=100)

    assert s.epoch(50) == 0.5
    assert s.rate(50) == pytest.approx(0.1 / 1.5)


def test_linear_rate_strictly_decreasing():
    s = LearningRateSchedule(initial_rate=1.0, examples_per_epoch=10)
    rates = [s.rate(n) for n in (0, 1, 5, 10, 100, 1000)]

    assert all(a > b for a, b in zip(rates, rates[1:]))
    assert s.rate(10) == pytest.approx(0.5)


def test_optimizer_rate_follows_examples_seen(make_config):
    cfg = make_config(
        exponential_learning_rate_base="0.9",
        rate="1.0",
        examples_per_epoch="10",
    )
    opt = build_optimizer(cfg.optimizer, OptimizerParams.from_config(cfg))

    assert opt.learning_rate == 1.0
    for _ in range(10):
        opt.step({}, {}, {}, 1, 0.0)

    assert opt.examples_seen == 10
    assert opt.learning_rate == pytest.approx(0.9)
