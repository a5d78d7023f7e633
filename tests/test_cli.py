import contextlib
import io
import json

from fingerspell.cli import main, print_table, read_replay, replay
from fingerspell.pipeline import GesturePipeline
from fingerspell.smoothing import SymbolDebouncer


def replay_lines(*hand_lists):
    """One JSON line per frame; each argument is that frame's list of hands."""
    return "".join(json.dumps(hands) + "\n" for hands in hand_lists)


def test_read_replay_skips_blank_and_tolerates_garbage():
    stream = io.StringIO('[]\n\nnot json\n{"a": 1}\n[[[0, 0, 0]]]\n')
    assert list(read_replay(stream)) == [[], [], [], [[[0, 0, 0]]]]


def test_replay_prints_one_symbol_per_frame(points_for):
    stream = io.StringIO(replay_lines([points_for("01000")], [], [points_for("11111"), points_for("00000")]))
    out = io.StringIO()
    count = replay(GesturePipeline(), stream, out=out)
    assert count == 3
    lines = out.getvalue().splitlines()
    assert [line.split()[-1] for line in lines] == ["D", "-", "5"]
    assert lines[1].split()[1] == "-----"


def test_replay_with_debouncer(points_for):
    stream = io.StringIO(replay_lines(*([[points_for("01111")]] * 3)))
    out = io.StringIO()
    replay(GesturePipeline(), stream, debouncer=SymbolDebouncer(window=3, min_count=2), out=out)
    assert [line.split()[-1] for line in out.getvalue().splitlines()] == ["-", "B", "B"]


def test_print_table():
    out = io.StringIO()
    print_table(GesturePipeline(), out=out)
    text = out.getvalue()
    assert "01000      D" in text
    assert "(other)    -" in text


def test_main_replay_file(tmp_path, capsys, points_for):
    path = tmp_path / "frames.jsonl"
    path.write_text(replay_lines([points_for("01110")], [points_for("00000")[:18]]))
    assert main(["--replay", str(path), "--config", str(tmp_path / "none.yaml")]) == 0
    out = capsys.readouterr().out.splitlines()
    assert [line.split()[-1] for line in out] == ["W", "-"]


def test_main_missing_file(tmp_path):
    assert main(["--replay", str(tmp_path / "missing.jsonl")]) == 1


def test_main_without_action():
    assert main([]) == 1


def test_main_bad_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text('classifier:\n  rules:\n    "012": X\n')
    assert main(["--config", str(path), "--table"]) == 2


def test_output_follows_redirected_stdout(points_for):
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        print_table(GesturePipeline())
        replay(GesturePipeline(), io.StringIO(replay_lines([points_for("01000")])))
    text = buf.getvalue()
    assert "(other)    -" in text
    assert text.splitlines()[-1].split()[-1] == "D"
