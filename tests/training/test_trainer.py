#!filepath: tests/training/test_trainer.py
import pytest

from lintrain.data.instance import LabeledInstance
from lintrain.sampling.sampling_policy import SamplingPolicy
from lintrain.training.strategies import LargeModelTrainer, SmallModelTrainer
from lintrain.training.trainer import MulticlassModelTrainer
from lintrain.utils.errors import ConfigurationError, OverrideParseError


def test_mira_model_requires_mira_optimizer_before_io(make_config, tmp_path):
    cfg = make_config(model="mira", optimizer="adagrad", class_prob_file=str(tmp_path / "missing"))

    with pytest.raises(ConfigurationError, match="mira") as exc:
        MulticlassModelTrainer(cfg, ["a", "b"])
    # 校验先于文件读取
    assert not isinstance(exc.value, OverrideParseError)


def test_bad_override_file_fails_construction(make_config, override_file):
    cfg = make_config(class_prob_file=str(override_file("a=0.5\n")))

    with pytest.raises(OverrideParseError):
        MulticlassModelTrainer(cfg, ["a", "b"])


def test_duplicate_categories_fail_construction(make_config):
    with pytest.raises(ConfigurationError):
        MulticlassModelTrainer(make_config(), ["a", "a"])


def test_strategy_dispatch(make_config):
    small = MulticlassModelTrainer(make_config(), ["a"])
    assert isinstance(small.strategy, SmallModelTrainer)

    large = MulticlassModelTrainer(make_config(large=None, bins="8"), ["a"])
    assert isinstance(large.strategy, LargeModelTrainer)
    assert large.strategy.bins == 8


def test_injected_strategy_is_used(make_config, separable_instances):
    calls = []

    class Passthrough(SmallModelTrainer):
        def consume(self, instances, model):
            calls.append(model)
            return model

    strategy = Passthrough(SamplingPolicy.build(["pos", "neg"]))
    trainer = MulticlassModelTrainer(make_config(), ["pos", "neg"], strategy=strategy)
    model = trainer.train(separable_instances)

    assert calls == [model]
    assert model.finalized is True


def test_accessors(make_config, override_file):
    cfg = make_config(
        iters="4",
        mini_batch_size="2",
        class_probs="pos:0.5",
        class_prob_file=str(override_file("neg:0.25\n")),
    )
    trainer = MulticlassModelTrainer(cfg, ["pos", "neg", "other"])

    assert trainer.iters == 4
    assert trainer.mini_batch_size == 2
    assert trainer.sample_prob("pos") == 0.5
    assert trainer.sample_prob("neg") == 0.25
    assert trainer.sample_prob("other") == 1.0


def test_get_model_returns_fresh_models(make_config):
    trainer = MulticlassModelTrainer(make_config(), ["a", "b"])
    assert trainer.get_model() is not trainer.get_model()


@pytest.mark.parametrize(
    "model, optimizer",
    [
        ("linear_svm", "elastic_net"),
        ("perceptron", "adagrad"),
        ("logistic_regression", "ftrl"),
        ("linear_svm", "passive_aggressive"),
        ("mira", "mira"),
    ],
)
def test_train_learns_separable_data(make_config, separable_instances, model, optimizer):
    cfg = make_config(model=model, optimizer=optimizer, iters="5", rate="0.5")
    trainer = MulticlassModelTrainer(cfg, ["pos", "neg"])

    out = trainer.train(separable_instances)

    assert out.finalized is True
    assert f"--model {model}" in out.arg_string
    assert out.predict({"x": 3.0, "bias": 1.0}) == "pos"
    assert out.predict({"x": -3.0, "bias": 1.0}) == "neg"


def test_train_applies_final_thresholding(make_config, separable_instances):
    cfg = make_config(model="linear_svm", final_thresholding="1000")
    out = MulticlassModelTrainer(cfg, ["pos", "neg"]).train(separable_instances)

    assert out.nonzero_counts() == {"pos": 0, "neg": 0}


def test_retrain_continues_from_finalized_model(make_config, separable_instances):
    trainer = MulticlassModelTrainer(make_config(model="linear_svm"), ["pos", "neg"])
    first = trainer.train(separable_instances)
    before = dict(first.submodel("pos").weights)

    second = trainer.retrain(separable_instances, first)

    assert second is not first
    assert second.finalized is True
    assert first.submodel("pos").weights == before
    assert second.submodel("pos").optimizer.examples_seen == 2 * len(separable_instances)


def test_retrain_rejects_other_categories(make_config, separable_instances):
    trainer = MulticlassModelTrainer(make_config(), ["pos", "neg"])
    model = MulticlassModelTrainer(make_config(), ["x", "y"]).train(
        [LabeledInstance("x", {"f": 1.0})]
    )

    with pytest.raises(ConfigurationError):
        trainer.retrain(separable_instances, model)
