"""
Finger-state extraction.
Reduces a 21-point landmark frame to one extended/curled bit per digit.
"""
from enum import IntEnum
from itertools import product
from typing import Iterable, List, Sequence, Tuple, Union

from .landmarks import LandmarkFrame, TIP_IDS

NUM_DIGITS = 5


class Digit(IntEnum):
    """Bit positions in a finger signature."""
    THUMB = 0
    INDEX = 1
    MIDDLE = 2
    RING = 3
    PINKY = 4


class FingerSignature(tuple):
    """
    Immutable 5-tuple of 0/1 values in digit order
    (thumb, index, middle, ring, pinky).
    """

    def __new__(cls, bits: Iterable[int]):
        bits = tuple(bits)
        if len(bits) != NUM_DIGITS:
            raise ValueError(f"signature needs {NUM_DIGITS} bits, got {len(bits)}")
        # Checked before conversion so 0.5 or 1.9 are not truncated into bits
        if any(isinstance(b, str) or b not in (0, 1) for b in bits):
            raise ValueError(f"signature bits must be 0 or 1, got {bits}")
        return super().__new__(cls, (int(b) for b in bits))

    @classmethod
    def parse(cls, key: str) -> "FingerSignature":
        """Parse a key such as '01000'."""
        key = key.strip()
        if len(key) != NUM_DIGITS or any(c not in "01" for c in key):
            raise ValueError(f"invalid signature key {key!r}")
        return cls(int(c) for c in key)

    @property
    def key(self) -> str:
        """Fixed-order concatenation of the bits, e.g. '01000'."""
        return "".join(str(b) for b in self)

    @property
    def extended_count(self) -> int:
        return sum(self)

    def is_extended(self, digit: Digit) -> bool:
        return self[digit] == 1

    def __repr__(self) -> str:
        return f"FingerSignature('{self.key}')"


def _thumb_extended(frame: LandmarkFrame) -> int:
    # Horizontal test against the joint just below the tip; assumes a
    # camera-facing hand of fixed handedness (no mirroring)
    tip = frame.get(LandmarkFrame.THUMB_TIP)
    joint = frame.get(LandmarkFrame.THUMB_TIP - 1)
    return 1 if tip[0] < joint[0] else 0


def _finger_extended(frame: LandmarkFrame, tip_id: int) -> int:
    # Vertical test against the joint two below the tip (y grows downward)
    tip = frame.get(tip_id)
    joint = frame.get(tip_id - 2)
    return 1 if tip[1] < joint[1] else 0


def extract_finger_states(
    frame: Union[LandmarkFrame, Sequence[Sequence[float]]]
) -> FingerSignature:
    """
    Compute the finger-state signature of a hand.

    Comparisons are strict, so a tip level with its reference joint counts
    as curled.

    Args:
        frame: LandmarkFrame or raw sequence of 21 points.

    Returns:
        FingerSignature in digit order.

    Raises:
        InvalidFrame: if a raw sequence is absent or malformed.
    """
    if not isinstance(frame, LandmarkFrame):
        frame = LandmarkFrame.from_points(frame)

    bits: List[int] = [_thumb_extended(frame)]
    for tip_id in TIP_IDS[1:]:
        bits.append(_finger_extended(frame, tip_id))
    return FingerSignature(bits)


def all_signatures() -> Tuple[FingerSignature, ...]:
    """Every possible signature (32), in binary counting order."""
    return tuple(FingerSignature(bits) for bits in product((0, 1), repeat=NUM_DIGITS))
