"""
Landmark frame data contract shared with the hand-pose detector.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

Landmark = Tuple[float, float, float]

NUM_LANDMARKS = 21


class InvalidFrame(ValueError):
    """Raised when a landmark frame is absent or malformed."""


def _validated_points(points) -> Tuple[Landmark, ...]:
    """
    Check 21 points of 2 or 3 finite x/y coordinates and return them as
    (x, y, z) float tuples, filling a missing z with 0.0.
    """
    if points is None:
        raise InvalidFrame("no landmarks given")
    try:
        arr = np.asarray(list(points), dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidFrame(f"landmarks are not numeric points: {e}") from e

    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise InvalidFrame(f"expected {NUM_LANDMARKS} points of 2 or 3 coordinates, got shape {arr.shape}")
    if arr.shape[0] != NUM_LANDMARKS:
        raise InvalidFrame(f"expected {NUM_LANDMARKS} landmarks, got {arr.shape[0]}")
    if not np.isfinite(arr[:, :2]).all():
        raise InvalidFrame("landmark x/y coordinates must be finite")

    if arr.shape[1] == 2:
        arr = np.hstack([arr, np.zeros((NUM_LANDMARKS, 1))])

    return tuple((float(x), float(y), float(z)) for x, y, z in arr)


@dataclass(frozen=True)
class LandmarkFrame:
    """
    One tracked hand at one point in time.

    Attributes:
        landmarks: Tuple of 21 (x, y, z) tuples, x/y normalized 0-1
        handedness: 'Left', 'Right' or 'Unknown'
        confidence: Detection confidence 0-1
    """
    landmarks: Tuple[Landmark, ...]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices. Order is fixed by the detector.
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    def __post_init__(self):
        # Every frame, however built, holds 21 finite points
        object.__setattr__(self, "landmarks", _validated_points(self.landmarks))

    @classmethod
    def from_points(
        cls,
        points: Optional[Iterable[Sequence[float]]],
        handedness: str = "Unknown",
        confidence: float = 1.0,
    ) -> "LandmarkFrame":
        """
        Validate raw points and build a frame.

        Accepts 21 (x, y) or (x, y, z) points; a missing z is filled with 0.0.

        Raises:
            InvalidFrame: if points is None, has the wrong shape, or holds
                non-finite x/y values.
        """
        if isinstance(points, LandmarkFrame):
            return points
        return cls(landmarks=points, handedness=handedness, confidence=float(confidence))

    @classmethod
    def from_mediapipe(
        cls,
        hand_landmarks,
        handedness: Optional[str] = None,
        confidence: float = 1.0,
    ) -> "LandmarkFrame":
        """Convert a list of MediaPipe NormalizedLandmark objects (.x, .y, .z)."""
        if hand_landmarks is None:
            raise InvalidFrame("no landmarks given")
        try:
            points = [(lm.x, lm.y, lm.z) for lm in hand_landmarks]
        except AttributeError as e:
            raise InvalidFrame(f"landmark is missing a coordinate: {e}") from e
        return cls.from_points(points, handedness=handedness or "Unknown", confidence=confidence)

    def get(self, index: int) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    @property
    def wrist(self) -> Landmark:
        return self.landmarks[self.WRIST]

    @property
    def tips(self) -> Tuple[Landmark, ...]:
        return tuple(self.landmarks[i] for i in TIP_IDS)

    def as_array(self) -> np.ndarray:
        """Landmarks as a (21, 3) float array."""
        return np.array(self.landmarks, dtype=float)


# Fingertip indices in digit order: thumb, index, middle, ring, pinky
TIP_IDS = (
    LandmarkFrame.THUMB_TIP,
    LandmarkFrame.INDEX_TIP,
    LandmarkFrame.MIDDLE_TIP,
    LandmarkFrame.RING_TIP,
    LandmarkFrame.PINKY_TIP,
)

# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
