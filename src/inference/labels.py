"""
Class-label loading.
"""

from __future__ import annotations

import logging
from typing import List

from models.errors import LabelResourceError


def load_class_names(path: str) -> List[str]:
    """
    Read class names from a newline-delimited text file.

    Line order is preserved so names stay index-aligned with the network's
    class output.

    Raises:
        LabelResourceError: If the file cannot be opened or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            names = [line.rstrip("\r\n") for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise LabelResourceError(f"Could not open class file {path}: {e}") from e

    logging.info(f"Loaded {len(names)} class names from {path}")
    return names
