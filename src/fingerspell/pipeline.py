"""
Per-frame gesture pipeline: landmarks -> finger signature -> symbol.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .finger_state import FingerSignature, extract_finger_states
from .gestures import GestureClassifier
from .landmarks import InvalidFrame, LandmarkFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureResult:
    """Outputs of one pipeline invocation."""
    frame: Optional[LandmarkFrame]          # For overlay drawing
    signature: Optional[FingerSignature]
    symbol: str
    sentinel: str = "-"

    @property
    def recognized(self) -> bool:
        return self.symbol != self.sentinel

    @property
    def hand_present(self) -> bool:
        return self.frame is not None


class GesturePipeline:
    """
    Stateless landmark-to-symbol pipeline.

    Every call returns a GestureResult; missing hands and malformed frames
    resolve to the classifier's sentinel.
    """

    def __init__(self, classifier: Optional[GestureClassifier] = None):
        self._classifier = classifier or GestureClassifier()

    @property
    def classifier(self) -> GestureClassifier:
        return self._classifier

    def _no_gesture(self, frame: Optional[LandmarkFrame] = None) -> GestureResult:
        sentinel = self._classifier.sentinel
        return GestureResult(frame=frame, signature=None, symbol=sentinel, sentinel=sentinel)

    def process(self, landmarks) -> GestureResult:
        """
        Classify one hand.

        Args:
            landmarks: LandmarkFrame, raw sequence of 21 points, or None when
                no hand was detected.
        """
        if landmarks is None:
            return self._no_gesture()

        try:
            frame = LandmarkFrame.from_points(landmarks)
            signature = extract_finger_states(frame)
        except InvalidFrame as e:
            logger.debug(f"Dropping invalid frame: {e}")
            return self._no_gesture()

        symbol = self._classifier.classify(signature)
        return GestureResult(
            frame=frame,
            signature=signature,
            symbol=symbol,
            sentinel=self._classifier.sentinel,
        )

    def process_hands(self, hands: Optional[Sequence]) -> GestureResult:
        """Classify the first hand of a detector's multi-hand output."""
        if hands is None:
            return self._no_gesture()
        try:
            first = next(iter(hands), None)
        except TypeError as e:
            logger.debug(f"Hand list is not iterable: {e}")
            return self._no_gesture()
        return self.process(first)

    def classify(self, landmarks) -> str:
        """Shortcut returning only the symbol."""
        return self.process(landmarks).symbol
