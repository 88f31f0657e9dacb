import asyncio
import concurrent.futures
import threading

import pytest

import evpromise
from evpromise.future import wrap_future
from common import CallbackCounter, run_pending


def test_complete_first_call_wins(reactor):
    future = reactor.future()
    assert future.result is None
    assert future.complete_success(1)
    assert not future.complete_success(2)
    assert not future.complete_failure(Exception("too late"))
    assert future.result == evpromise.Success(1)
    assert future.isFulfilled


def test_complete_failure(reactor):
    error = ValueError("bad")
    future = reactor.future()
    assert future.complete_failure(error)
    assert not future.complete_success(1)
    assert future.result.error is error
    assert not future.result.ok


def test_complete_failure_not_an_exception(reactor):
    future = evpromise.Future.failed(reactor, "boom")
    error = future.result.error
    assert isinstance(error, evpromise.RejectionError)
    assert error.reason == "boom"


def test_on_complete_not_synchronous(reactor):
    callback = CallbackCounter()
    future = reactor.future()
    future.on_complete(callback)
    future.complete_success(1)
    assert callback.counter == 0
    run_pending(reactor)
    assert callback.counter == 1
    assert callback.last_args == (evpromise.Success(1),)


def test_on_complete_after_completion(reactor):
    callback = CallbackCounter()
    error = Exception("boom")
    future = evpromise.Future.failed(reactor, error)
    future.on_complete(callback)
    run_pending(reactor)
    run_pending(reactor)
    assert callback.counter == 1
    result, = callback.last_args
    assert not result.ok
    assert result.error is error


def test_on_complete_runs_on_loop_thread(reactor):
    threads = []
    future = reactor.future()
    future.on_complete(lambda result: threads.append(threading.current_thread()))
    thread = threading.Thread(target=future.complete_success, args=(1,))
    thread.start()
    thread.join()
    run_pending(reactor)
    assert threads == [threading.current_thread()]


def test_wrap_concurrent_future(reactor):
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        future = wrap_future(pool.submit(lambda: 42), reactor)
    assert future.result == evpromise.Success(42)


def test_wrap_concurrent_future_error(reactor):
    def fail():
        raise KeyError("x")
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        future = wrap_future(pool.submit(fail), reactor)
    assert isinstance(future.result.error, KeyError)


def test_wrap_coroutine(reactor):
    async def compute():
        await asyncio.sleep(0)
        return "computed"
    future = wrap_future(compute(), reactor)
    assert future.isPending
    run_pending(reactor, delay=0.05)
    assert future.result == evpromise.Success("computed")


def test_wrap_cancelled(reactor):
    asyncio_future = reactor.event_loop.create_future()
    future = wrap_future(asyncio_future, reactor)
    asyncio_future.cancel()
    run_pending(reactor)
    assert isinstance(future.result.error, concurrent.futures.CancelledError)


def test_wrap_future_is_identity(reactor):
    future = reactor.future()
    assert wrap_future(future, reactor) is future


def test_repr(reactor):
    future = reactor.future()
    assert "pending" in repr(future)
    future.complete_success(1)
    assert "fulfilled value=1" in repr(future)


def test_complete_success_stores_value_as_is(reactor):
    class Job:
        def done(self):
            return "finished"

    class Deferred:
        def then(self, success, failure):
            pass
    for value in [Job(), Deferred(), evpromise.Future.completed(reactor, 1)]:
        future = reactor.future()
        assert future.complete_success(value)
        assert future.isFulfilled
        assert future.result.value is value
