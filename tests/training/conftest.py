# tests/training/conftest.py
from __future__ import annotations

from typing import List

import pytest

from lintrain.data.instance import LabeledInstance


class RecordingModel:
    """
    Minimal stand-in for MulticlassLinearModel: records update order
    and mini-batch boundaries.
    """

    def __init__(self):
        self.seen: List[LabeledInstance] = []
        self.batches: List[List[LabeledInstance]] = []

    def update_batch(self, instances: List[LabeledInstance]) -> None:
        self.batches.append(list(instances))
        self.seen.extend(instances)


@pytest.fixture
def recording_model() -> RecordingModel:
    return RecordingModel()
