import asyncio
import logging

logger = logging.getLogger("evpromise.gate")


class Gate:
    """Counts outstanding work and lets a waiter through once the count is back at zero.

    :meth:`release` opens the gate regardless of the count, which is how a rejected chain
    lets :meth:`await_zero` return while some of its steps will never complete.
    """

    def __init__(self, reactor):
        self.reactor = reactor
        self.count = 0
        self.released = False
        self._waiter = None

    @property
    def is_open(self):
        return self.released or self.count == 0

    def increment(self):
        self.count += 1
        logger.debug("incremented gate to %d", self.count)

    def decrement(self):
        if self.count <= 0:
            raise ValueError("gate count cannot go below zero")
        self.count -= 1
        logger.debug("decremented gate to %d", self.count)
        if self.count == 0:
            self._wake()

    def release(self):
        logger.debug("releasing gate with count %d", self.count)
        self.released = True
        self._wake()

    def _wake(self):
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(None)

    async def wait(self):
        while not self.is_open:
            self._waiter = asyncio.get_running_loop().create_future()
            await self._waiter
        self._waiter = None

    def await_zero(self):
        '''Run the event loop of the reactor until the gate is open'''
        if self.is_open:
            return
        self.reactor.run(self.wait())

    def __repr__(self):
        return f"<Gate count={self.count} released={self.released}>"
