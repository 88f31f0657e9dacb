import asyncio
import logging

import evpromise.asyncio
import evpromise.settings
from .future import Future

logger = logging.getLogger("evpromise.reactor")


class Reactor:
    """Owns the event loop that runs the continuations of promise chains.

    Each chain is bound to one reactor, and all of its state is only touched from callbacks on this loop.
    Independent chains (or tests) can use independent reactors.
    """

    def __init__(self, event_loop=None, async_method=None):
        self.event_loop = event_loop or asyncio.new_event_loop()
        self.async_method = async_method

    @classmethod
    def from_running_loop(cls):
        '''Reactor using the currently running loop, for use with :meth:`evpromise.promise.Chain.fulfill_async`'''
        return cls(asyncio.get_running_loop())

    def call_soon(self, callback, *args):
        return self.event_loop.call_soon_threadsafe(callback, *args)

    def call_later(self, delay, callback, *args):
        return self.event_loop.call_later(delay, callback, *args)

    def future(self):
        return Future(self)

    def run(self, coro):
        async_method = self.async_method or evpromise.settings.main.async_method
        logger.debug("running %r using %s", coro, async_method)
        if async_method == "nest":
            return evpromise.asyncio.just_run(coro, self.event_loop)
        elif async_method == "awaitio":
            with evpromise.asyncio.with_event_loop(self.event_loop):
                return self.event_loop.run_until_complete(coro)
        else:
            raise RuntimeError(f'No async method: {async_method}')

    def close(self):
        self.event_loop.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
