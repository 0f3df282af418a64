import io
import threading

import pytest

from osdemo.boundedbuffer import (
    BoundedBuffer,
    main,
    run_with_conditions,
    run_with_semaphores,
)


def test_put_get_is_fifo():
    buf = BoundedBuffer(3)
    buf.put(1)
    buf.put(2)
    assert len(buf) == 2
    assert buf.get() == 1
    assert buf.get() == 2
    assert len(buf) == 0


def test_non_positive_size_rejected():
    with pytest.raises(ValueError):
        BoundedBuffer(0)


def test_put_blocks_when_full():
    buf = BoundedBuffer(1)
    buf.put(7)
    putter = threading.Thread(target=buf.put, args=(8,))
    putter.start()
    putter.join(0.1)
    assert putter.is_alive()
    assert buf.get() == 7
    putter.join(2)
    assert not putter.is_alive()
    assert buf.get() == 8


def test_conditions_every_value_consumed_once():
    consumed = run_with_conditions(2, 50, 3, False)
    assert len(consumed) == 3
    assert sorted(v for taken in consumed for v in taken) == list(range(50))


def test_single_cv_with_one_consumer_keeps_order():
    assert run_with_conditions(1, 20, 1, True) == [list(range(20))]


def test_semaphores_each_consumer_sees_one_end_marker():
    out = io.StringIO()
    consumed = run_with_semaphores(2, 30, 3, out)
    assert sorted(v for taken in consumed for v in taken) == list(range(30))
    lines = out.getvalue().splitlines()
    markers = sorted(line.split()[0] for line in lines if line.split()[1] == "-1")
    assert markers == ["0", "1", "2"]
    assert len(lines) == 33


def test_semaphores_too_many_consumers():
    with pytest.raises(ValueError):
        run_with_semaphores(2, 5, 11, io.StringIO())


def test_main_semaphore_mode_output(capsys):
    assert main(["2", "5", "1", "--mode", "sem"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"0 {i}" for i in range(5)] + ["0 -1"]


def test_main_reports_bad_size(capsys):
    assert main(["0", "5", "1"]) == 1
    assert "boundedbuffer:" in capsys.readouterr().err