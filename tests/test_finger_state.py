import pytest

from fingerspell.finger_state import (
    Digit,
    FingerSignature,
    all_signatures,
    extract_finger_states,
)
from fingerspell.landmarks import InvalidFrame, LandmarkFrame


@pytest.mark.parametrize("key", ["00000", "01111", "01000", "11111", "10101", "00011"])
def test_engineered_frames_give_their_signature(frame_for, key):
    assert extract_finger_states(frame_for(key)).key == key


def test_raw_points_are_accepted(points_for):
    assert extract_finger_states(points_for("01100")) == FingerSignature.parse("01100")


def test_ties_count_as_curled():
    # Every tip level with its reference joint on the compared axis
    points = [(0.5, 0.5, 0.0)] * 21
    assert extract_finger_states(points).key == "00000"


def test_thumb_uses_x_and_fingers_use_y():
    points = [[0.5, 0.5, 0.0] for _ in range(21)]
    # Thumb tip higher than its joint but not further left: still curled
    points[LandmarkFrame.THUMB_TIP][1] = 0.1
    # Index tip further left than its reference but not higher: still curled
    points[LandmarkFrame.INDEX_TIP][0] = 0.1
    assert extract_finger_states(points).key == "00000"


def test_thumb_compares_against_ip_joint_only():
    points = [[0.5, 0.5, 0.0] for _ in range(21)]
    points[LandmarkFrame.THUMB_MCP][0] = 0.1
    points[LandmarkFrame.THUMB_TIP][0] = 0.3
    assert extract_finger_states(points).is_extended(Digit.THUMB)


def test_fingers_compare_against_pip_joint():
    points = [[0.5, 0.5, 0.0] for _ in range(21)]
    # Tip above the PIP but below the DIP still counts as extended
    points[LandmarkFrame.INDEX_DIP][1] = 0.1
    points[LandmarkFrame.INDEX_PIP][1] = 0.6
    points[LandmarkFrame.INDEX_TIP][1] = 0.4
    assert extract_finger_states(points).key == "01000"


def test_z_is_ignored(points_for):
    points = [(x, y, 5.0 * i) for i, (x, y, _) in enumerate(points_for("01110"))]
    assert extract_finger_states(points).key == "01110"


def test_deterministic(frame_for):
    frame = frame_for("01111")
    assert len({extract_finger_states(frame) for _ in range(10)}) == 1


@pytest.mark.parametrize("points", [None, [], [(0.5, 0.5, 0.0)] * 18, [(0.5, 0.5, 0.0)] * 22])
def test_wrong_size_raises_invalid_frame(points):
    with pytest.raises(InvalidFrame):
        extract_finger_states(points)


def test_signature_validation():
    with pytest.raises(ValueError):
        FingerSignature([1, 0, 1])
    with pytest.raises(ValueError):
        FingerSignature([0, 2, 0, 0, 0])
    with pytest.raises(ValueError):
        FingerSignature.parse("0100x")


def test_signature_helpers():
    signature = FingerSignature.parse("01100")
    assert signature == (0, 1, 1, 0, 0)
    assert signature.extended_count == 2
    assert signature.is_extended(Digit.MIDDLE)
    assert not signature.is_extended(Digit.RING)
    assert repr(signature) == "FingerSignature('01100')"


def test_all_signatures():
    signatures = all_signatures()
    assert len(signatures) == 32
    assert len(set(signatures)) == 32
    assert signatures[0].key == "00000"
    assert signatures[-1].key == "11111"


@pytest.mark.parametrize("bits", [(0, 0.5, 0, 0, 0), (0, 1.9, 0, 0, 0), (0, -1, 0, 0, 0)])
def test_non_binary_bits_are_not_truncated(bits):
    with pytest.raises(ValueError):
        FingerSignature(bits)


def test_bool_bits_are_accepted():
    assert FingerSignature((False, True, False, False, False)).key == "01000"
