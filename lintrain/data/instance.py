# lintrain/data/instance.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Sequence

import pandas as pd


@dataclass(frozen=True)
class LabeledInstance:
    """
    One training example: class label + sparse features.
    """

    label: str
    features: Mapping[str, float] = field(default_factory=dict)


def instances_from_frame(
    frame: pd.DataFrame,
    label_column: str,
    feature_columns: Optional[Sequence[str]] = None,
) -> Iterator[LabeledInstance]:
    """
    Row-wise LabeledInstance stream from a DataFrame.

    - label is cast to str
    - NaN and 0.0 features are dropped (sparse)
    - non-numeric feature columns raise ValueError
    """
    if label_column not in frame.columns:
        raise KeyError(f"label column {label_column!r} not in frame")

    cols = list(feature_columns) if feature_columns is not None else [
        c for c in frame.columns if c != label_column
    ]
    X = frame[cols].astype(float)
    labels = frame[label_column].astype(str)

    for label, row in zip(labels, X.itertuples(index=False, name=None)):
        features = {
            str(c): v for c, v in zip(cols, row) if not pd.isna(v) and v != 0.0
        }
        yield LabeledInstance(label=label, features=features)
