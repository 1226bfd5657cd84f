"""
Inference backend interface.

Backends take a network-input frame and return the raw detection grid: one
row per candidate, at least 7 columns, laid out as
[batch_id, class_id, confidence, left, top, right, bottom] with box
coordinates normalized to [0, 1].
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class InferenceBackend(Protocol):
    def infer(self, frame: np.ndarray) -> np.ndarray:
        ...
