"""Process demos: fork, wait, exec, redirection, shared files and pipes.

Each demo forks real child processes. A child reports what it would print
through a pipe, so the parent can return every line in a ``ForkReport``.
"""

import argparse
import os
import sys
import time
from dataclasses import dataclass, field

PIPE_MESSAGE = "_This is getting sent to the pipe_"
POLL_INTERVAL = 0.01


@dataclass
class ForkReport:
    """What a fork demo produced: the child's pid and exit status and the lines
    printed by each side, plus all of them in display order."""

    child_pid: int
    exit_status: int
    child_lines: list[str] = field(default_factory=list)
    parent_lines: list[str] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)


def _spawn(child) -> tuple[int, int]:
    """Fork; the child runs ``child(report)`` and exits, the parent gets
    ``(pid, read end of the report pipe)``."""
    read_fd, write_fd = os.pipe()
    pid = os.fork()
    if pid == 0:
        code = 0
        try:
            os.close(read_fd)
            with os.fdopen(write_fd, "w") as report:
                child(report)
        except BaseException:
            code = 1
        finally:
            os._exit(code)
    os.close(write_fd)
    return pid, read_fd


def _collect(pid: int, read_fd: int) -> tuple[list[str], int, int]:
    """Read the child's report to the end, then reap it.

    Returns the reported lines, the pid ``waitpid`` returned and the exit code.
    """
    with os.fdopen(read_fd, "r") as report:
        text = report.read()
    waited, status = os.waitpid(pid, 0)
    return text.splitlines(), waited, os.waitstatus_to_exitcode(status)


def _exec_into_report(report, argv: list[str]) -> None:
    """Make the report pipe the child's stdout and replace the child with ``argv``."""
    report.flush()
    os.dup2(report.fileno(), 1)
    try:
        os.execvp(argv[0], argv)
    except OSError:
        os.write(1, b"this shouldn't print out\n")
        raise


def fork_hello() -> ForkReport:
    """Fork once; parent and child each say who they are."""
    me = os.getpid()
    first = f"hello world (pid:{me})"

    def child(report) -> None:
        report.write(f"hello, I am child (pid:{os.getpid()})\n")

    pid, read_fd = _spawn(child)
    parent_line = f"hello, I am parent of {pid} (pid:{me})"
    child_lines, _, status = _collect(pid, read_fd)
    return ForkReport(pid, status, child_lines, [first, parent_line],
                      [first, parent_line, *child_lines])


def fork_wait() -> ForkReport:
    """Fork; the parent waits, so the child always speaks first."""
    me = os.getpid()
    first = f"hello world (pid:{me})"

    def child(report) -> None:
        report.write(f"hello, I am child (pid:{os.getpid()})\n")
        report.flush()
        time.sleep(1)

    pid, read_fd = _spawn(child)
    child_lines, waited, status = _collect(pid, read_fd)
    parent_line = f"hello, I am parent of {pid} (wc:{waited}) (pid:{me})"
    return ForkReport(pid, status, child_lines, [first, parent_line],
                      [first, *child_lines, parent_line])


def fork_exec(filename) -> ForkReport:
    """Fork; the child runs ``wc filename``, the parent waits for it."""
    me = os.getpid()
    first = f"hello world (pid:{me})"

    def child(report) -> None:
        report.write(f"hello, I am child (pid:{os.getpid()})\n")
        _exec_into_report(report, ["wc", str(filename)])

    pid, read_fd = _spawn(child)
    child_lines, waited, status = _collect(pid, read_fd)
    parent_line = f"hello, I am parent of {pid} (wc:{waited}) (pid:{me})"
    return ForkReport(pid, status, child_lines, [first, parent_line],
                      [first, *child_lines, parent_line])


def fork_redirect(filename, output) -> ForkReport:
    """Fork; the child sends its standard output to ``output`` and runs ``wc filename``."""

    def child(report) -> None:
        report.close()
        os.close(1)
        fd = os.open(output, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o700)
        if fd != 1:
            os.dup2(fd, 1)
            os.close(fd)
        os.execvp("wc", ["wc", str(filename)])

    pid, read_fd = _spawn(child)
    _, waited, status = _collect(pid, read_fd)
    if waited < 0:
        raise ChildProcessError("wait failed")
    return ForkReport(pid, status)


def shared_variable() -> ForkReport:
    """Parent and child change their own copy of the same variable."""
    x = 100

    def child(report) -> None:
        value = x
        report.write(f"Child process: x = {value}\n")
        value = 200
        report.write(f"Child process (after changing x): x = {value}\n")

    pid, read_fd = _spawn(child)
    parent_lines = [f"Parent process: x = {x}"]
    x = 300
    parent_lines.append(f"Parent process (after changing x): x = {x}")
    child_lines, _, status = _collect(pid, read_fd)
    return ForkReport(pid, status, child_lines, parent_lines,
                      [*parent_lines, *child_lines])


def shared_file(path) -> ForkReport:
    """Parent and child write through one descriptor opened before the fork."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        os.write(fd, b"Parent before fork\n")

        def child(report) -> None:
            os.write(fd, b"Child writing\n")

        pid, read_fd = _spawn(child)
        os.write(fd, b"Parent writing\n")
    finally:
        os.close(fd)
    _, _, status = _collect(pid, read_fd)
    return ForkReport(pid, status)


def ordered_without_wait(path) -> ForkReport:
    """Make the child finish first without wait(): the parent polls a file
    until the child has written "true" into it."""
    fd = os.open(path, os.O_CREAT | os.O_RDWR | os.O_TRUNC, 0o700)

    def child(report) -> None:
        os.write(fd, b"true")
        os.close(fd)
        report.write("I am child process\nhello\n")

    try:
        pid, read_fd = _spawn(child)
    finally:
        os.close(fd)

    while True:
        with open(path, "rb") as backend:
            if backend.read(4) == b"true":
                break
        time.sleep(POLL_INTERVAL)

    child_lines, _, status = _collect(pid, read_fd)
    parent_lines = ["I am parent process", "goodbye"]
    return ForkReport(pid, status, child_lines, parent_lines,
                      [*child_lines, *parent_lines])


def pipe_between_children() -> ForkReport:
    """One child writes into a pipe as its stdout; a second child reads the
    pipe as its stdin. The report is about the second child."""
    data_r, data_w = os.pipe()

    def writer(report) -> None:
        os.close(data_r)
        os.dup2(data_w, 1)
        os.write(1, PIPE_MESSAGE.encode())

    def reader(report) -> None:
        os.close(data_w)
        os.dup2(data_r, 0)
        received = os.read(0, 512)
        report.write(received.decode() + "\n")

    try:
        first_pid, first_fd = _spawn(writer)
        second_pid, second_fd = _spawn(reader)
    finally:
        os.close(data_r)
        os.close(data_w)

    child_lines, _, status = _collect(second_pid, second_fd)
    _collect(first_pid, first_fd)
    parent_lines = ["goodbye"]
    return ForkReport(second_pid, status, child_lines, parent_lines,
                      [*child_lines, *parent_lines])


def _exec_ls() -> ForkReport:
    def child(report) -> None:
        report.write("Executing Child Process\n")
        report.flush()
        os.dup2(report.fileno(), 1)
        os.execv("/bin/ls", ["ls"])

    pid, read_fd = _spawn(child)
    child_lines, _, status = _collect(pid, read_fd)
    return ForkReport(pid, status, child_lines, [], child_lines)


def _wait_in_child() -> ForkReport:
    def child(report) -> None:
        try:
            waited = os.wait()[0]
        except ChildProcessError:
            waited = -1
        report.write(f"child process\nReturn code from wait() is {waited}\n")

    pid, read_fd = _spawn(child)
    parent_lines = ["parent process"]
    child_lines, _, status = _collect(pid, read_fd)
    return ForkReport(pid, status, child_lines, parent_lines,
                      [*parent_lines, *child_lines])


def _waitpid_child() -> ForkReport:
    def child(report) -> None:
        report.write(f"child process. PID is {os.getpid()}\n")

    pid, read_fd = _spawn(child)
    child_lines, _, status = _collect(pid, read_fd)
    parent_lines = [f"parent process. PID  is {os.getpid()}"]
    return ForkReport(pid, status, child_lines, parent_lines,
                      [*child_lines, *parent_lines])


def _closed_stdout() -> ForkReport:
    def child(report) -> None:
        report.close()
        os.close(1)
        try:
            os.write(1, b"Write something\n")
        except OSError:
            pass

    pid, read_fd = _spawn(child)
    _, _, status = _collect(pid, read_fd)
    parent_lines = ["Parent process"]
    return ForkReport(pid, status, [], parent_lines, parent_lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="processes")
    parser.add_argument("demo", choices=[
        "p1", "p2", "p3", "p4", "quest1", "quest2", "quest3", "quest4",
        "quest5", "quest6", "quest7", "quest8"])
    parser.add_argument("--file", default="p3.c", help="file for wc to count")
    parser.add_argument("--output", default="./p4.output",
                        help="where the redirected child writes")
    parser.add_argument("--path", default=None, help="file shared by parent and child")
    args = parser.parse_args(argv)

    demos = {
        "p1": fork_hello,
        "p2": fork_wait,
        "p3": lambda: fork_exec(args.file),
        "p4": lambda: fork_redirect(args.file, args.output),
        "quest1": shared_variable,
        "quest2": lambda: shared_file(args.path or "output.txt"),
        "quest3": lambda: ordered_without_wait(args.path or "backend_file.txt"),
        "quest4": _exec_ls,
        "quest5": _wait_in_child,
        "quest6": _waitpid_child,
        "quest7": _closed_stdout,
        "quest8": pipe_between_children,
    }
    sys.stdout.flush()
    try:
        report = demos[args.demo]()
    except OSError as exc:
        print(f"processes: {exc}", file=sys.stderr)
        return 1
    for line in report.lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())