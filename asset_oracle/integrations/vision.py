"""
Image classification for the existence check.

MockVisionClassifier stands in for a computer-vision model: known assets get a
high building-detection confidence in [0.85, 0.99).
"""

from __future__ import annotations

import random
from typing import Protocol

VISION_SOURCE = "ComputerVision"
MOCK_CONFIDENCE_FLOOR = 0.85
MOCK_CONFIDENCE_SPREAD = 0.14


class ImageClassifier(Protocol):
    source: str

    def classify(self, image_url: str) -> float:
        """Return building-detection confidence in [0, 1]; raise ProviderError on failure."""
        ...


class MockVisionClassifier:
    """Free-tier stand-in: 0.85 + U(0, 1) * 0.14. Seed for reproducible runs."""

    source = VISION_SOURCE

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def classify(self, image_url: str) -> float:
        return MOCK_CONFIDENCE_FLOOR + self._rng.random() * MOCK_CONFIDENCE_SPREAD
