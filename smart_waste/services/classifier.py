"""
Waste classifier.

Handlers depend on the Classifier protocol only, so a real model can replace
RandomClassifier without touching request handling. RandomClassifier never
opens the image: it draws a uniform category and a confidence in [0.5, 1.0].
"""

import random
from typing import Optional, Protocol, Sequence

from ..models.schemas import Classification

WASTE_CATEGORIES: Sequence[str] = ("plastic", "paper", "metal", "glass", "organic")

MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 1.0


# PUBLIC_INTERFACE
class Classifier(Protocol):
    """Anything that can label an image reference."""

    def classify(self, image_ref: str) -> Classification:
        ...


# PUBLIC_INTERFACE
class RandomClassifier:
    """Placeholder classifier returning a random category and confidence."""

    def __init__(self, categories: Sequence[str] = WASTE_CATEGORIES, rng: Optional[random.Random] = None):
        if not categories:
            raise ValueError("At least one category is required")
        self.categories = tuple(categories)
        self._rng = rng or random.Random()

    def classify(self, image_ref: str) -> Classification:
        category = self._rng.choice(self.categories)
        confidence = round(self._rng.uniform(MIN_CONFIDENCE, MAX_CONFIDENCE), 2)
        return Classification(
            category=category,
            confidence=confidence,
            description=f"This appears to be {category} waste based on visual analysis.",
        )
