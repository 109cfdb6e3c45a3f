#!filepath: tests/models/test_model_artifact.py
import json

import pytest

from lintrain.data.instance import LabeledInstance
from lintrain.models.artifact import (
    META_FILE,
    MODEL_FILE,
    load_model_artifact,
    resolve_model_artifact,
    save_model_artifact,
)
from lintrain.training.assembler import assemble_multiclass_model
from lintrain.training.postprocess import finalize
from lintrain.utils.errors import ModelStateError


@pytest.fixture
def finalized_model(make_config):
    cfg = make_config(model="linear_svm")
    model = assemble_multiclass_model(cfg, ["pos", "neg"])
    model.update(LabeledInstance("pos", {"x": 1.0}))
    return finalize(model, 0.0, cfg.to_arg_string())


def test_save_and_load_roundtrip(tmp_path, finalized_model):
    out = tmp_path / "artifact"
    artifact = save_model_artifact(finalized_model, out)

    assert (out / MODEL_FILE).exists()
    meta = json.loads((out / META_FILE).read_text())
    assert meta["model_type"] == "linear_svm"
    assert meta["categories"] == ["pos", "neg"]

    model, loaded = load_model_artifact(out)

    assert loaded.categories == artifact.categories
    assert loaded.arg_string == finalized_model.arg_string
    assert model.submodel("pos").weights == finalized_model.submodel("pos").weights
    assert model.finalized is True


def test_unfinalized_model_cannot_be_saved(tmp_path, make_config):
    model = assemble_multiclass_model(make_config(), ["a"])
    with pytest.raises(ModelStateError):
        save_model_artifact(model, tmp_path / "x")


def test_resolve_requires_metadata(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_model_artifact(tmp_path)
