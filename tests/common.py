import asyncio

import evpromise


class CallbackCounter(object):
    def __init__(self, return_value=None):
        self.counter = 0
        self.return_value = return_value
        self.last_args = None
        self.last_kwargs = None

    def __call__(self, *args, **kwargs):
        self.counter += 1
        self.last_args = args
        self.last_kwargs = kwargs
        return self.return_value


def resolve_later(reactor, value, delay=0.01):
    future = reactor.future()
    reactor.call_later(delay, future.complete_success, value)
    return future


def fail_later(reactor, error, delay=0.01):
    future = reactor.future()
    reactor.call_later(delay, future.complete_failure, error)
    return future


def run_pending(reactor, delay=0):
    '''Give the loop of the reactor a chance to run the callbacks scheduled so far'''
    reactor.run(asyncio.sleep(delay))
