import pytest

from fingerspell.landmarks import LandmarkFrame, NUM_LANDMARKS


def make_points(bits="00000", base=(0.5, 0.5, 0.0)):
    """
    21 points engineered to produce the given signature key.

    Everything sits on `base`; only each digit's tip and reference joint move.
    """
    points = [list(base) for _ in range(NUM_LANDMARKS)]
    thumb, *fingers = [int(c) for c in bits]

    # Thumb: tip x left of (extended) or right of (curled) the joint below it
    points[LandmarkFrame.THUMB_IP][0] = 0.5
    points[LandmarkFrame.THUMB_TIP][0] = 0.4 if thumb else 0.6

    # Fingers: tip y above (extended) or below (curled) the joint two below it
    for tip_id, bit in zip((8, 12, 16, 20), fingers):
        points[tip_id - 2][1] = 0.5
        points[tip_id][1] = 0.3 if bit else 0.7

    return [tuple(p) for p in points]


def make_frame(bits="00000", **kwargs):
    return LandmarkFrame.from_points(make_points(bits), **kwargs)


@pytest.fixture
def points_for():
    return make_points


@pytest.fixture
def frame_for():
    return make_frame
