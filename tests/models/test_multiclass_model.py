#!filepath: tests/models/test_multiclass_model.py
import pytest

from lintrain.data.instance import LabeledInstance
from lintrain.models import MulticlassLinearModel, build_binary_model
from lintrain.optim import OptimizerParams, build_optimizer
from lintrain.utils.errors import ModelStateError


@pytest.fixture
def model() -> MulticlassLinearModel:
    subs = {
        label: build_binary_model("perceptron", build_optimizer("elastic_net", OptimizerParams()))
        for label in ("a", "b")
    }
    return MulticlassLinearModel(subs, model_type="perceptron")


def test_one_vs_all_update(model):
    model.update(LabeledInstance("a", {"f": 1.0}))

    assert model.submodel("a").weight("f") == pytest.approx(0.1)
    assert model.submodel("b").weight("f") == pytest.approx(-0.1)
    assert model.predict({"f": 1.0}) == "a"
    assert model.predict({"f": -1.0}) == "b"


def test_unknown_label_is_negative_everywhere(model):
    model.update(LabeledInstance("zzz", {"f": 1.0}))

    assert model.submodel("a").weight("f") < 0
    assert model.submodel("b").weight("f") < 0


def test_scores_cover_every_category(model):
    assert set(model.scores({"f": 1.0})) == {"a", "b"}


def test_finalized_model_rejects_updates(model):
    model.teardown()

    assert model.finalized is True
    with pytest.raises(ModelStateError):
        model.update(LabeledInstance("a", {"f": 1.0}))


def test_reopen_returns_independent_trainable_copy(model):
    model.update(LabeledInstance("a", {"f": 1.0}))
    model.teardown()

    clone = model.reopen()

    assert clone is not model
    assert clone.finalized is False
    assert model.finalized is True
    assert clone.submodel("a") is not model.submodel("a")
    assert clone.submodel("a").weights == model.submodel("a").weights

    clone.update(LabeledInstance("b", {"f": 1.0}))
    assert clone.submodel("a").weights != model.submodel("a").weights


def test_serialize(model):
    model.set_arg_string("--model perceptron")
    data = model.serialize()

    assert data["model_type"] == "perceptron"
    assert data["arg_string"] == "--model perceptron"
    assert set(data["submodels"]) == {"a", "b"}


def test_update_batch_is_one_step_per_submodel(model):
    model.update_batch([LabeledInstance("a", {"f": 1.0}), LabeledInstance("b", {"g": 1.0})])

    a, b = model.submodel("a"), model.submodel("b")
    assert a.weights == pytest.approx({"f": 0.1, "g": -0.1})
    assert b.weights == pytest.approx({"f": -0.1, "g": 0.1})
    assert a.updates == b.updates == 1
    assert a.optimizer.examples_seen == 1


def test_finalized_model_rejects_batch_updates(model):
    model.teardown()

    with pytest.raises(ModelStateError):
        model.update_batch([LabeledInstance("a", {"f": 1.0})])
