import threading
from datetime import timedelta

import pytest

from commonkit.utils.semaphore import Semaphore


def test_source_sequence():
    semaphore = Semaphore(1)
    semaphore.acquire()
    assert semaphore.try_acquire() is False
    assert semaphore.try_acquire_on_time(0.05) is False
    semaphore.release()
    assert semaphore.try_acquire() is True
    assert semaphore.available_permits() == 0


def test_available_permits():
    semaphore = Semaphore(3)
    semaphore.acquire()
    semaphore.acquire()
    assert semaphore.available_permits() == 1


def test_timed_acquire_succeeds_after_release():
    semaphore = Semaphore(1)
    semaphore.acquire()
    timer = threading.Timer(0.05, semaphore.release)
    timer.start()
    assert semaphore.try_acquire_on_time(timedelta(seconds=2)) is True
    timer.join()


def test_release_without_acquire():
    with pytest.raises(RuntimeError):
        Semaphore(1).release()