import io

import pytest

from osdemo.pstack import PersistentStack, main, run


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "ps.img"
    path.write_bytes(bytes(4096))
    return path


def _run(path, commands):
    out = io.StringIO()
    run(path, commands, out)
    return out.getvalue()


def test_documented_session_persists_between_runs(image):
    assert _run(image, ["7", "13", "47", "pop"]) == "47\n"
    assert _run(image, ["pop", "pop", "99"]) == "13\n7\n"
    assert _run(image, ["pop"]) == "99\n"


def test_pop_on_empty_prints_nothing(image):
    assert _run(image, ["pop", "pop"]) == ""


def test_push_pop_round_trip(image):
    with PersistentStack(image) as stack:
        assert stack.push(-5)
        assert stack.push(2147483647)
        assert len(stack) == 2
        assert stack.pop() == 2147483647
        assert stack.pop() == -5
        assert stack.pop() is None
        assert len(stack) == 0


def test_full_stack_drops_pushes(tmp_path):
    path = tmp_path / "small.img"
    path.write_bytes(bytes(16))
    with PersistentStack(path) as stack:
        assert stack.push(1)
        assert stack.push(2)
        assert not stack.push(3)
        assert len(stack) == 2
        assert stack.pop() == 2


def test_bad_file_size_rejected(tmp_path):
    path = tmp_path / "bad.img"
    path.write_bytes(bytes(6))
    with pytest.raises(ValueError):
        PersistentStack(path)


def test_non_numeric_push_is_zero(image):
    assert _run(image, ["abc", "pop"]) == "0\n"


def test_main_uses_ps_img_in_cwd(image, monkeypatch, capsys):
    monkeypatch.chdir(image.parent)
    assert main(["3", "pop"]) == 0
    assert capsys.readouterr().out == "3\n"


def test_main_reports_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["pop"]) == 1
    assert "pstack:" in capsys.readouterr().err