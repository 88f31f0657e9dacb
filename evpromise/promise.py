"""Evented promise chains.

Avoid the callback pyramid of doom::

    import evpromise

    reactor = evpromise.Reactor()
    chain = evpromise.promise(lambda: client.get('test'), reactor)\\
        .then(lambda value: client.set('test', value))\\
        .then(lambda _: client.get('test'))\\
        .then(print)\\
        .catch(lambda exc: print('I failed!', exc))\\
        .fulfill()

A chain is created with :func:`promise`, which calls the producer right away. Each :meth:`Chain.then`
adds a step that receives the value of the previous one; a step may return a plain value or a future
(or coroutine), in which case the value it resolves to is passed on. Nothing runs until the event loop
does, which is what :meth:`Chain.fulfill` is for: it runs the loop until all steps are done or the
chain was rejected.

The first error raised by the producer or any step (or carried by a future they return) rejects the
chain: the remaining steps are skipped and the error goes straight to the handler passed to
:meth:`Chain.catch`. Errors nobody catches are logged and reported at exit.
"""
import atexit
import logging
import traceback

import evpromise.events
import evpromise.result
import evpromise.settings
from .future import Future, unwrap_error
from .gate import Gate
from .reactor import Reactor
from .result import Success, Failure, Pending

logger = logging.getLogger("evpromise.promise")


def check_unhandled():
    if Chain.unhandled_exceptions and evpromise.settings.main.promise.report_unhandled:
        print("Unhandled rejections in promise chains:")
        for error in Chain.unhandled_exceptions:
            traceback.print_exception(type(error), error, error.__traceback__)


def raise_unhandled():
    if Chain.unhandled_exceptions:
        raise Chain.unhandled_exceptions[0]


atexit.register(check_unhandled)


class Chain:
    """A sequence of asynchronous steps, see :func:`promise`"""
    unhandled_exceptions = []

    def __init__(self, producer, reactor=None):
        # a chain without a reactor gets a private one, closed once fulfilled
        self.owns_reactor = reactor is None
        self.reactor = reactor or Reactor()
        self.gate = Gate(self.reactor)
        self.tail = None
        self.rejected = False
        self.handler = None
        self.handled = False
        self.delivered = False
        self.steps = 0
        self.signal_step = evpromise.events.Signal("step (index, value)")
        self.signal_rejected = evpromise.events.Signal("rejected (error)")

        self.reject_future = self.reactor.future()
        self.reject_future.on_complete(self._on_rejected)
        self._try_producer(producer)

    def _try_producer(self, producer):
        try:
            outcome = evpromise.result.outcome_of(producer(), self.reactor)
        except Exception as e:
            logger.debug("producer %r raised %r", producer, e)
            outcome = Failure(e)
        if isinstance(outcome, Failure):
            self.tail = self.reject_future
            self._reject(outcome.error)
        elif isinstance(outcome, Pending):
            self.tail = outcome.future
        else:
            self.tail = Future.completed(self.reactor, outcome.value)

    def then(self, step):
        '''Add ``step(value)`` to the chain, it will be called with the value of the previous step

        The step may return a plain value, or something pending (a future or a coroutine) whose
        value is passed on to the next step. Raising an exception (or returning a :class:`evpromise.Failure`)
        rejects the chain. On a rejected chain this does nothing.
        '''
        if self.rejected:
            logger.debug("chain already rejected, skipping step %r", step)
            return self

        self.gate.increment()
        self.steps += 1
        index = self.steps
        cvin = self.tail
        cvout = self.reactor.future()
        self.tail = cvout

        def forward(result):
            if not result.ok:
                self._reject(result.error)
                return
            try:
                self.signal_step.emit(index, result.value)
            except Exception as e:
                self._reject(e)
                return
            cvout.complete_success(result.value)
            self.gate.decrement()

        def call_step(result):
            if not result.ok:
                self._reject(result.error)
                return
            try:
                outcome = evpromise.result.outcome_of(step(result.value), self.reactor)
            except Exception as e:
                logger.debug("step %d (%r) raised %r", index, step, e)
                self._reject(e)
                return
            if isinstance(outcome, Failure):
                self._reject(outcome.error)
            elif isinstance(outcome, Pending):
                outcome.future.on_complete(forward)
            else:
                forward(Success(outcome.value))

        logger.debug("added step %d: %r", index, step)
        cvin.on_complete(call_step)
        return self

    def _reject(self, error):
        self.rejected = True
        if self.reject_future.complete_failure(error):
            # the delivery of the rejection is outstanding work, until the handler ran
            self.gate.increment()
        else:
            logger.debug("chain already rejected, dropping error %r", error)

    def _on_rejected(self, result):
        error = result.error
        self.delivered = True
        try:
            try:
                self.signal_rejected.emit(unwrap_error(error))
            except Exception:
                logger.exception("error in rejected listener of %r", self)
            if self.handler is not None:
                self._call_handler(error)
            else:
                self.unhandled(error)
        finally:
            self.gate.release()

    def _call_handler(self, error):
        self.handled = True
        try:
            self.handler(unwrap_error(error))
        except Exception:
            logger.exception("error in catch handler %r", self.handler)

    def unhandled(self, error):
        logger.error("unhandled rejection in %r", self, exc_info=error)
        Chain.unhandled_exceptions.append(error)

    def catch(self, handler):
        '''Call ``handler(error)`` with the first error of the chain

        When the chain was already rejected and the error was reported as unhandled, the handler
        is called right away.
        '''
        if self.handled:
            logger.debug("rejection already handled, not calling %r", handler)
            return self
        self.handler = handler
        if self.delivered:
            error = self.reject_future.reason
            if error in Chain.unhandled_exceptions:
                Chain.unhandled_exceptions.remove(error)
            self._call_handler(error)
        return self

    def fulfill(self):
        '''Run the event loop until all steps are done or the chain is rejected'''
        logger.debug("fulfilling %r", self)
        try:
            self.gate.await_zero()
        finally:
            if self.owns_reactor:
                self.reactor.close()
        return self

    async def fulfill_async(self):
        '''Like :meth:`fulfill`, but awaits on the running loop, which should be the loop of the reactor'''
        await self.gate.wait()
        return self

    @property
    def error(self):
        if self.reject_future.isRejected:
            return unwrap_error(self.reject_future.reason)

    @property
    def value(self):
        if self.tail is not None and self.tail.isFulfilled:
            return self.tail.value

    def get(self):
        if self.reject_future.isRejected:
            raise self.reject_future.reason
        if self.tail is None or not self.tail.isFulfilled or not self.gate.is_open:
            raise RuntimeError(f"{self!r} did not complete yet, call fulfill first")
        return self.tail.value

    def __repr__(self):
        if self.rejected:
            state = "rejected"
        elif self.gate.is_open and self.tail is not None and self.tail.isFulfilled:
            state = "fulfilled"
        else:
            state = "pending"
        return f"<Chain {state} steps={self.steps} at {hex(id(self))}>"


def promise(producer, reactor=None):
    '''Start a promise chain with ``producer()``, the shortcut for :class:`Chain`'''
    return Chain(producer, reactor)
