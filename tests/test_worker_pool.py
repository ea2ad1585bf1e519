import threading

import pytest

from pob_runtime.worker_pool import WorkerPool


def test_zero_size_rejected():
    with pytest.raises(ValueError):
        WorkerPool(0)


def test_all_jobs_run_before_close_returns():
    results = []
    lock = threading.Lock()

    def make_job(n):
        def job():
            with lock:
                results.append(n)

        return job

    with WorkerPool(4) as pool:
        assert pool.size == 4
        for n in range(50):
            pool.execute(make_job(n))
    assert sorted(results) == list(range(50))
    with pytest.raises(RuntimeError):
        pool.execute(make_job(99))


def test_execute_after_close_raises():
    pool = WorkerPool(1)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.execute(lambda: None)


def test_failing_job_does_not_stop_worker():
    results = []

    def bad():
        raise ValueError("boom")

    with WorkerPool(1) as pool:
        pool.execute(bad)
        pool.execute(lambda: results.append("ok"))
    assert results == ["ok"]


def test_single_worker_keeps_order():
    results = []
    with WorkerPool(1) as pool:
        for n in range(10):
            pool.execute(lambda n=n: results.append(n))
    assert results == list(range(10))


def test_size_and_double_close():
    pool = WorkerPool(3)
    assert pool.size == 3
    pool.close()
    pool.close()
    with pytest.raises(RuntimeError):
        pool.execute(lambda: None)