import io
import threading

from osdemo.syncjoin import (
    Synchronizer,
    join_spin,
    join_with_condition,
    join_with_semaphore,
    main,
)


def _lines(buf):
    return buf.getvalue().splitlines()


def test_signal_before_wait_returns_immediately_and_rearms():
    sync = Synchronizer()
    sync.signal()
    sync.wait()

    waiter = threading.Thread(target=sync.wait)
    waiter.start()
    waiter.join(0.1)
    assert waiter.is_alive()
    sync.signal()
    waiter.join(2)
    assert not waiter.is_alive()


def test_join_with_condition_order():
    buf = io.StringIO()
    join_with_condition(0.01, buf)
    assert _lines(buf) == ["parent: begin", "child", "parent: end"]


def test_join_with_semaphore_order():
    buf = io.StringIO()
    join_with_semaphore(0.01, buf)
    assert _lines(buf) == ["parent: begin", "child", "parent: end"]


def test_join_spin_order():
    buf = io.StringIO()
    join_spin(0.01, buf)
    assert _lines(buf) == ["parent: begin", "child", "parent: end"]


def test_main_cv_mode(capsys):
    assert main(["cv", "--delay", "0.01"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "parent: end"


def test_main_no_state_var_loses_signal(capsys):
    assert main(["no-state-var", "--delay", "0.05", "--timeout", "0.05"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "parent: gave up waiting" in lines
    assert lines[-1] == "parent: end"


def test_main_no_lock_loses_signal(capsys):
    assert main(["no-lock", "--delay", "0.05", "--timeout", "0.05"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "child: signal" in lines
    assert "parent: gave up waiting" in lines
    assert lines[-1] == "parent: end"