"""Cat classifier implementations."""

import os
import random
from typing import Any, List, Optional, Tuple

import cv2
import numpy as np

from ..config.defaults import CASCADE_FILES, CLASSIFIER_SETTINGS
from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from .interfaces import ImageServiceInterface

logger = get_logger("image_service")


class FakeImageService(ImageServiceInterface):
    """Classifier stand-in that answers at random.

    Useful for demos and for wiring tests; pass a seed for repeatable runs.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._random.random() < 0.5


class OpenCVImageService(ImageServiceInterface):
    """Cat classifier backed by the Haar cat-face cascades shipped with OpenCV.

    ``confidence_threshold`` is a percentage. Each cascade hit is scored
    from its stage weight and compared against the threshold.
    """

    def __init__(self, cascade_path: Optional[str] = None,
                 scale_factor: float = CLASSIFIER_SETTINGS["scale_factor"],
                 min_neighbors: int = CLASSIFIER_SETTINGS["min_neighbors"],
                 min_size: Tuple[int, int] = CLASSIFIER_SETTINGS["min_size"]):
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_size = min_size
        self.cascade = self._load_cascade(cascade_path)

    def _load_cascade(self, cascade_path: Optional[str]) -> Any:
        candidates: List[str] = [cascade_path] if cascade_path else [
            os.path.join(cv2.data.haarcascades, name) for name in CASCADE_FILES
        ]

        for path in candidates:
            if not os.path.exists(path):
                logger.debug(f"Cascade not found: {path}")
                continue
            cascade = cv2.CascadeClassifier(path)
            if not cascade.empty():
                logger.info(f"Loaded cat cascade: {path}")
                return cascade

        raise ConfigurationError(f"No usable cat cascade among {candidates}")

    def _to_grayscale(self, image: Any) -> np.ndarray:
        frame = np.asarray(image)
        if frame.ndim == 3 and frame.shape[2] == 4:
            frame = cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
        elif frame.ndim == 3:
            frame = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        if frame.dtype != np.uint8:
            frame = cv2.convertScaleAbs(frame)
        return cv2.equalizeHist(frame)

    def get_confidences(self, image: Any) -> List[float]:
        """Return a 0-100 confidence for each cascade hit."""
        gray = self._to_grayscale(image)
        _, _, level_weights = self.cascade.detectMultiScale3(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_size,
            outputRejectLevels=True
        )
        if level_weights is None or len(level_weights) == 0:
            return []

        # Stage weights are unbounded; squash them onto 0-100
        weights = np.asarray(level_weights, dtype=np.float64).ravel()
        return [float(100.0 / (1.0 + np.exp(-w))) for w in weights]

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        if image is None:
            return False

        confidences = self.get_confidences(image)
        best = max(confidences, default=0.0)
        logger.debug(f"Cat classifier: {len(confidences)} candidates, best confidence {best:.1f}")
        return best >= confidence_threshold


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, ...) into a BGR array."""
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError("Could not decode image data")
    return image


def create_image_service(backend: str = "fake") -> ImageServiceInterface:
    """Build a classifier for the configured backend."""
    if backend == "fake":
        return FakeImageService()
    if backend == "opencv":
        return OpenCVImageService()
    raise ConfigurationError(f"Unknown classifier backend: {backend}")
