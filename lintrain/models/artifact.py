# lintrain/models/artifact.py
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Tuple

import joblib

from lintrain.models.multiclass import MulticlassLinearModel
from lintrain.utils.errors import ModelStateError
from lintrain.utils.logger import logs

MODEL_FILE = "model.joblib"
META_FILE = "artifact.json"


# ============================================================
# Model Artifact
# ============================================================
@dataclass(frozen=True)
class ModelArtifact:
    """
    ModelArtifact（FINAL / FROZEN）

    Semantics:
    - path always points to an artifact ROOT directory
    - NEVER points to a single file
    """

    path: Path
    model_type: str
    categories: Tuple[str, ...]
    arg_string: str
    created_at: datetime
    nonzero: Dict[str, int]


def save_model_artifact(model: MulticlassLinearModel, artifact_dir: Path) -> ModelArtifact:
    """
    Persist a finalized model:

        <artifact_dir>/model.joblib
        <artifact_dir>/artifact.json
    """
    if not model.finalized:
        raise ModelStateError("only finalized models can be saved")

    artifact_dir = Path(artifact_dir)
    artifact_dir.mkdir(parents=True, exist_ok=True)

    artifact = ModelArtifact(
        path=artifact_dir,
        model_type=model.model_type,
        categories=model.categories,
        arg_string=model.arg_string,
        created_at=datetime.now(),
        nonzero=model.nonzero_counts(),
    )

    joblib.dump(model, artifact_dir / MODEL_FILE)
    (artifact_dir / META_FILE).write_text(
        json.dumps(
            {
                "model_type": artifact.model_type,
                "categories": list(artifact.categories),
                "arg_string": artifact.arg_string,
                "created_at": artifact.created_at.isoformat(),
                "nonzero": artifact.nonzero,
            },
            indent=2,
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )

    logs.info(f"[ModelArtifact] saved {artifact.model_type} → {artifact_dir}")
    return artifact


def resolve_model_artifact(artifact_dir: Path) -> ModelArtifact:
    artifact_dir = Path(artifact_dir)
    meta_path = artifact_dir / META_FILE
    if not meta_path.exists():
        raise FileNotFoundError(
            f"[ModelArtifact] {META_FILE} not found in {artifact_dir}"
        )

    meta = json.loads(meta_path.read_text(encoding="utf-8"))

    return ModelArtifact(
        path=artifact_dir,
        model_type=meta["model_type"],
        categories=tuple(meta["categories"]),
        arg_string=meta["arg_string"],
        created_at=datetime.fromisoformat(meta["created_at"]),
        nonzero=dict(meta.get("nonzero") or {}),
    )


def load_model_artifact(artifact_dir: Path) -> Tuple[MulticlassLinearModel, ModelArtifact]:
    artifact = resolve_model_artifact(artifact_dir)
    model = joblib.load(artifact.path / MODEL_FILE)

    if not isinstance(model, MulticlassLinearModel):
        raise TypeError(
            f"[ModelArtifact] expected MulticlassLinearModel, got {type(model).__name__}"
        )
    return model, artifact
