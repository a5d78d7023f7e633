"""
MediaPipe hand detector adapter using the Tasks API.
Turns detector results into LandmarkFrames, one callback per processed image.
"""
import logging
from pathlib import Path
from typing import Callable, List, Optional
import time

import numpy as np

from .config import MediaPipeConfig
from .landmarks import InvalidFrame, LandmarkFrame

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Optional[LandmarkFrame]], None]

MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"


def _handedness(result, index: int):
    """(category_name, score) for hand `index`, if the result carries it."""
    groups = getattr(result, "handedness", None) or getattr(result, "multi_handedness", None)
    if not groups or index >= len(groups):
        return None, 1.0
    group = groups[index]
    # Solutions API wraps categories in a .classification list
    categories = getattr(group, "classification", group)
    if not categories:
        return None, 1.0
    top = categories[0]
    name = getattr(top, "category_name", None) or getattr(top, "label", None)
    return name, float(getattr(top, "score", 1.0))


def _raw_hands(result) -> list:
    if result is None:
        return []
    hands = getattr(result, "hand_landmarks", None)
    if hands is None:
        hands = getattr(result, "multi_hand_landmarks", None) or []
    return list(hands)


def _to_frame(result, index: int, hand) -> LandmarkFrame:
    # Solutions API wraps points in a .landmark list
    points = getattr(hand, "landmark", hand)
    name, score = _handedness(result, index)
    return LandmarkFrame.from_mediapipe(points, handedness=name, confidence=score)


def frames_from_result(result) -> List[LandmarkFrame]:
    """
    Convert a HandLandmarkerResult (Tasks) or a Solutions result
    (.multi_hand_landmarks) into LandmarkFrames.

    Malformed hands are skipped with a warning.
    """
    frames = []
    for i, hand in enumerate(_raw_hands(result)):
        try:
            frames.append(_to_frame(result, i, hand))
        except InvalidFrame as e:
            logger.warning(f"Skipping malformed hand {i}: {e}")
    return frames


def first_frame(result) -> Optional[LandmarkFrame]:
    """
    The first tracked hand, or None when no hand was detected or the first
    hand is malformed. Later hands are never used in its place.
    """
    hands = _raw_hands(result)
    if not hands:
        return None
    try:
        return _to_frame(result, 0, hands[0])
    except InvalidFrame as e:
        logger.debug(f"Dropping malformed first hand: {e}")
        return None


class HandDetector:
    """
    MediaPipe HandLandmarker in LIVE_STREAM mode.

    Callers push RGB images with detect(); MediaPipe invokes the result
    callback once per processed image and the first hand (or None) is
    forwarded to on_frame. Camera capture is left to the caller.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(
        self,
        config: MediaPipeConfig,
        model_path: Optional[Path] = None,
        on_frame: Optional[FrameCallback] = None,
    ):
        self._config = config
        self._model_path = Path(model_path) if model_path else self.DEFAULT_MODEL_PATH
        self._on_frame = on_frame

        # Lazy initialization
        self._landmarker = None
        self._is_running = False
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1
        self._frame_count = 0

    def start(self) -> bool:
        """
        Create the MediaPipe landmarker.

        Returns:
            True if started successfully, False if the model file is missing.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error(f"Model file not found: {self._model_path}")
            logger.error(f"Download from: {MODEL_URL}")
            return False

        import mediapipe as mp

        BaseOptions = mp.tasks.BaseOptions
        HandLandmarker = mp.tasks.vision.HandLandmarker
        HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
        VisionRunningMode = mp.tasks.vision.RunningMode

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.LIVE_STREAM,
            num_hands=self._config.max_num_hands,
            min_hand_detection_confidence=self._config.min_detection_confidence,
            min_tracking_confidence=self._config.min_tracking_confidence,
            result_callback=self._handle_result,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info(f"Hand detector started (max hands: {self._config.max_num_hands})")
        return True

    def stop(self) -> None:
        """Release the landmarker."""
        self._is_running = False
        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

    def _next_timestamp(self) -> int:
        # MediaPipe requires strictly monotonic timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def detect(self, rgb_image: np.ndarray) -> bool:
        """
        Submit one RGB image (H x W x 3, uint8) for asynchronous detection.

        Returns:
            False if the detector is not running.
        """
        if not self._is_running or self._landmarker is None:
            return False

        import mediapipe as mp

        image = np.ascontiguousarray(rgb_image, dtype=np.uint8)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image)
        self._frame_count += 1
        self._landmarker.detect_async(mp_image, self._next_timestamp())
        return True

    def _handle_result(self, result, output_image, timestamp_ms: int) -> None:
        frame = first_frame(result)
        if self._on_frame is not None:
            self._on_frame(frame)

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
