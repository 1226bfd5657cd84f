"""
Inference layer: network loading, backend selection and class labels.
"""

from .backend import InferenceBackend
from .opencv_backend import OpenCvDnnBackend, DnnConfig
from .labels import load_class_names

__all__ = [
    "InferenceBackend",
    "OpenCvDnnBackend",
    "DnnConfig",
    "load_class_names",
]
