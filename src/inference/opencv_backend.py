"""
OpenCV DNN inference backend.

Runs an SSD-style TensorFlow frozen graph through cv2.dnn, on either the
OpenCV CPU target or CUDA when OpenCV was built with it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import cv2
import numpy as np

from models.errors import ModelLoadError
from .backend import InferenceBackend


@dataclass(frozen=True)
class DnnConfig:
    architecture_path: str
    weights_path: str
    use_gpu: bool = False
    scale: float = 1.0 / 255
    swap_rb: bool = True


class OpenCvDnnBackend(InferenceBackend):
    def __init__(self, net, use_gpu: bool = False, scale: float = 1.0 / 255, swap_rb: bool = True):
        self._net = net
        self.scale = scale
        self.swap_rb = swap_rb
        self.use_gpu = False
        self.configure_backend(use_gpu)

    @classmethod
    def load(cls, architecture_path: str, weights_path: str, use_gpu: bool = False) -> "OpenCvDnnBackend":
        """
        Load a TensorFlow frozen graph and its text topology.

        Raises:
            ModelLoadError: If either file is missing or OpenCV cannot parse them.
        """
        for path in (weights_path, architecture_path):
            if not os.path.exists(path):
                raise ModelLoadError(f"Model file not found: {path}")

        try:
            net = cv2.dnn.readNetFromTensorflow(weights_path, architecture_path)
        except cv2.error as e:
            raise ModelLoadError(f"Error loading network: {e}") from e

        if net.empty():
            raise ModelLoadError(f"Network loaded from {weights_path} is empty")

        logging.info(f"Network loaded: weights={weights_path}, topology={architecture_path}")
        return cls(net, use_gpu=use_gpu)

    @classmethod
    def from_config(cls, cfg: DnnConfig) -> "OpenCvDnnBackend":
        backend = cls.load(cfg.architecture_path, cfg.weights_path, use_gpu=cfg.use_gpu)
        backend.scale = cfg.scale
        backend.swap_rb = cfg.swap_rb
        return backend

    def configure_backend(self, use_gpu: bool) -> None:
        """Select the CUDA backend/target, or the OpenCV backend on CPU."""
        if use_gpu:
            self._net.setPreferableBackend(cv2.dnn.DNN_BACKEND_CUDA)
            self._net.setPreferableTarget(cv2.dnn.DNN_TARGET_CUDA)
        else:
            self._net.setPreferableBackend(cv2.dnn.DNN_BACKEND_OPENCV)
            self._net.setPreferableTarget(cv2.dnn.DNN_TARGET_CPU)
        self.use_gpu = use_gpu
        logging.info(f"Inference backend: {'CUDA' if use_gpu else 'CPU'}")

    def infer(self, frame: np.ndarray) -> np.ndarray:
        h, w = frame.shape[:2]
        blob = cv2.dnn.blobFromImage(frame, self.scale, (w, h), swapRB=self.swap_rb)
        self._net.setInput(blob)
        output = self._net.forward()

        # (1, 1, N, 7) -> (N, 7)
        output = np.asarray(output)
        return output.reshape(output.shape[-2], output.shape[-1])
