import os

import pytest

from osdemo.processes import (
    PIPE_MESSAGE,
    fork_exec,
    fork_hello,
    fork_redirect,
    fork_wait,
    main,
    ordered_without_wait,
    pipe_between_children,
    shared_file,
    shared_variable,
)


@pytest.fixture
def counted_file(tmp_path):
    content = "one two\nthree\n"
    path = tmp_path / "words.txt"
    path.write_text(content)
    expected = [str(content.count("\n")), str(len(content.split())),
                str(len(content)), str(path)]
    return path, expected


def test_fork_hello_reports_both_sides():
    report = fork_hello()
    assert report.exit_status == 0
    assert report.child_lines == [f"hello, I am child (pid:{report.child_pid})"]
    assert report.lines[0] == f"hello world (pid:{os.getpid()})"
    assert report.parent_lines[1] == (
        f"hello, I am parent of {report.child_pid} (pid:{os.getpid()})")


def test_fork_wait_child_comes_first_and_wait_returns_its_pid():
    report = fork_wait()
    child_line = f"hello, I am child (pid:{report.child_pid})"
    parent_line = (f"hello, I am parent of {report.child_pid} "
                   f"(wc:{report.child_pid}) (pid:{os.getpid()})")
    assert report.lines[1:] == [child_line, parent_line]


def test_fork_exec_runs_wc(counted_file):
    path, expected = counted_file
    report = fork_exec(path)
    assert report.exit_status == 0
    assert report.child_lines[0] == f"hello, I am child (pid:{report.child_pid})"
    assert report.child_lines[1].split() == expected


def test_fork_exec_of_missing_file_reports_wc_failure(tmp_path):
    report = fork_exec(tmp_path / "missing.txt")
    assert report.exit_status == 1


def test_shared_variable_each_process_has_its_own_copy():
    report = shared_variable()
    assert report.child_lines == [
        "Child process: x = 100",
        "Child process (after changing x): x = 200",
    ]
    assert report.parent_lines == [
        "Parent process: x = 100",
        "Parent process (after changing x): x = 300",
    ]


def test_shared_file_both_writes_land(tmp_path):
    path = tmp_path / "output.txt"
    report = shared_file(path)
    lines = path.read_text().splitlines()
    assert report.exit_status == 0
    assert lines[0] == "Parent before fork"
    assert sorted(lines[1:]) == ["Child writing", "Parent writing"]


def test_ordered_without_wait_child_first(tmp_path):
    path = tmp_path / "backend_file.txt"
    report = ordered_without_wait(path)
    assert report.lines == ["I am child process", "hello",
                            "I am parent process", "goodbye"]
    assert path.read_bytes() == b"true"


def test_pipe_between_children_passes_message():
    report = pipe_between_children()
    assert report.child_lines == [PIPE_MESSAGE]
    assert report.lines == [PIPE_MESSAGE, "goodbye"]


def test_main_prints_shared_variable_demo(capsys):
    assert main(["quest1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert sorted(out) == sorted([
        "Parent process: x = 100",
        "Parent process (after changing x): x = 300",
        "Child process: x = 100",
        "Child process (after changing x): x = 200",
    ])


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit):
        main(["nope"])