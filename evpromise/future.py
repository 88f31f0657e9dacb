import asyncio
import concurrent.futures
import logging
import threading

import aplus

from .result import Success, Failure

logger = logging.getLogger("evpromise.future")


class RejectionError(Exception):
    '''Wraps a failure value that is not an exception, e.g. ``Failure("boom")``'''
    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


def _as_exception(error):
    if isinstance(error, Exception):
        return error
    return RejectionError(error)


def unwrap_error(error):
    '''The value a failure was created with, undoing the wrapping of :func:`_as_exception`'''
    if isinstance(error, RejectionError):
        return error.reason
    return error


class Future(aplus.Promise):
    """A write-once value bound to a reactor.

    The first call to :meth:`complete_success` or :meth:`complete_failure` wins, later calls are ignored.
    Callbacks registered with :meth:`on_complete` are never called synchronously, they are scheduled on the
    event loop of the reactor, also when the future is completed from another thread.
    """

    def __init__(self, reactor):
        aplus.Promise.__init__(self)
        self.reactor = reactor
        self._complete_lock = threading.Lock()

    @classmethod
    def completed(cls, reactor, value):
        future = cls(reactor)
        future.complete_success(value)
        return future

    @classmethod
    def failed(cls, reactor, error):
        future = cls(reactor)
        future.complete_failure(error)
        return future

    def complete_success(self, value):
        with self._complete_lock:
            if not self.isPending:
                logger.debug("%r already completed, ignoring value %r", self, value)
                return False
            # no adoption of promise-like values, the chain flattens through outcome_of
            self._fulfill(value)
            return True

    def complete_failure(self, error):
        error = _as_exception(error)
        with self._complete_lock:
            if not self.isPending:
                logger.debug("%r already completed, ignoring error %r", self, error)
                return False
            self.reject(error)
            return True

    @property
    def result(self):
        if self.isFulfilled:
            return Success(self.value)
        elif self.isRejected:
            return Failure(self.reason)
        else:
            return None

    def on_complete(self, callback):
        '''Call ``callback(Success(value))`` or ``callback(Failure(error))`` on the event loop once completed'''
        def success(value):
            self.reactor.call_soon(callback, Success(value))

        def failure(error):
            self.reactor.call_soon(callback, Failure(error))
        self.done(success, failure)

    def __repr__(self):
        if self.isFulfilled:
            state = f"fulfilled value={self.value!r}"
        elif self.isRejected:
            state = f"rejected reason={self.reason!r}"
        else:
            state = "pending"
        return f"<Future {state} at {hex(id(self))}>"


def wrap_future(future, reactor):
    '''Adapt a concurrent.futures/asyncio future or a coroutine to a :class:`Future` on ``reactor``'''
    if isinstance(future, Future):
        return future
    if asyncio.iscoroutine(future):
        future = reactor.event_loop.create_task(future)
    promise = Future(reactor)

    def callback(future):
        if future.cancelled():
            promise.complete_failure(concurrent.futures.CancelledError())
            return
        e = future.exception()
        if e:
            promise.complete_failure(e)
        else:
            promise.complete_success(future.result())
    future.add_done_callback(callback)
    return promise
