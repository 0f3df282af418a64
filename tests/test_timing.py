import time

from osdemo.timing import get_time, spin


def test_get_time_tracks_wall_clock():
    before = time.time()
    now = get_time()
    after = time.time()
    assert before <= now <= after


def test_get_time_does_not_go_backwards():
    first = get_time()
    second = get_time()
    assert second >= first


def test_spin_waits_at_least_the_requested_time():
    start = get_time()
    spin(0.05)
    assert get_time() - start >= 0.05


def test_spin_zero_returns_quickly():
    start = get_time()
    spin(0)
    assert get_time() - start < 0.5