import os
import sys

import pytest

from buildkit.differ import DiffError, Differ, find, isatty


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("BUILDIFIER_DIFF", "BUILDIFIER_MULTIDIFF", "DISPLAY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(sys, "platform", "linux")
    return monkeypatch


def test_isatty_regular_file(tmp_path):
    path = tmp_path / "f"
    path.write_text("x")
    with open(path) as handle:
        assert isatty(handle.fileno()) is False


def test_isatty_pipe_and_bad_fd():
    r, w = os.pipe()
    os.close(w)
    assert isatty(r) is False
    os.close(r)
    assert isatty(r) is False


def test_isatty_character_device(clean_env):
    with open(os.devnull) as handle:
        assert isatty(handle.fileno()) is True


def test_isatty_windows_is_false(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    with open(os.devnull) as handle:
        assert isatty(handle.fileno()) is False


def test_find_defaults(clean_env):
    differ, warning = find()
    assert differ.cmd == "diff --unified"
    assert differ.multi_diff is False
    assert warning is False


def test_find_windows_uses_fc(clean_env):
    clean_env.setattr(sys, "platform", "win32")
    differ, warning = find()
    assert differ.cmd == "FC"
    assert warning is True


def test_find_env_command(clean_env):
    clean_env.setenv("BUILDIFIER_DIFF", "meld")
    differ, warning = find()
    assert differ.cmd == "meld"
    assert differ.multi_diff is False
    assert warning is True


def test_find_env_multidiff(clean_env):
    clean_env.setenv("BUILDIFIER_DIFF", "tkdiff")
    clean_env.setenv("BUILDIFIER_MULTIDIFF", "1")
    differ, warning = find()
    assert differ.cmd == "tkdiff"
    assert differ.multi_diff is True
    assert warning is True


def test_find_multidiff_without_command(clean_env):
    clean_env.setenv("BUILDIFIER_MULTIDIFF", "1")
    differ, warning = find()
    assert differ.cmd == "tkdiff"
    assert warning is True


def test_find_multidiff_zero_warns(clean_env):
    clean_env.setenv("BUILDIFIER_MULTIDIFF", "0")
    differ, warning = find()
    assert differ.cmd == "diff --unified"
    assert warning is True


def test_show_queues_for_multi_diff():
    differ = Differ(cmd=":", multi_diff=True)
    differ.show("a", "b")
    differ.show("c", "d")
    assert differ.args == [":", "a", "b", ":", "c", "d"]


def test_colon_command_runs_nothing():
    differ = Differ(cmd=":", multi_diff=False)
    differ.show("missing-old", "missing-new")
    assert differ.args == []


def test_run_without_pairs_does_nothing():
    differ = Differ(cmd="false", multi_diff=True)
    differ.run()
    assert differ.args == []


def test_show_runs_command_with_arguments(tmp_path):
    src = tmp_path / "old"
    dst = tmp_path / "new copy"
    src.write_text("content")
    Differ(cmd="cp").show(str(src), str(dst))
    assert dst.read_text() == "content"


def test_failing_command_raises():
    with pytest.raises(DiffError):
        Differ(cmd="false").show("a", "b")


def test_multi_diff_run_executes_queued(tmp_path):
    out = tmp_path / "args"
    differ = Differ(cmd=f'printf "%s\\n" > "{out}"', multi_diff=True)
    differ.show("x", "y")
    differ.run()
    assert out.read_text().split() == [":", "x", "y"]