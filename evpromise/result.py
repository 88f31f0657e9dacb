"""Tagged values flowing through a chain.

A :class:`evpromise.future.Future` completes with a :class:`Success` or a :class:`Failure`. A step passed to
:meth:`evpromise.promise.Chain.then` returns an :class:`Immediate` value, a :class:`Pending` future, or a
:class:`Failure`. Plain return values are tagged by :func:`outcome_of`, so a step can simply ``return x + 1``.
"""
import asyncio
import concurrent.futures


class Success:
    ok = True
    error = None

    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Success) and other.value == self.value

    def __repr__(self):
        return f'Success({self.value!r})'


class Failure:
    ok = False
    value = None

    def __init__(self, error):
        self.error = error

    def __eq__(self, other):
        return isinstance(other, Failure) and other.error is self.error

    def __repr__(self):
        return f'Failure({self.error!r})'


class Immediate:
    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f'Immediate({self.value!r})'


class Pending:
    def __init__(self, future):
        self.future = future

    def __repr__(self):
        return f'Pending({self.future!r})'


def outcome_of(value, reactor):
    '''Tag the return value of a producer or step, adapting foreign futures and coroutines to a Future on ``reactor``'''
    from .future import Future, wrap_future
    if isinstance(value, (Immediate, Pending, Failure)):
        return value
    if isinstance(value, Future):
        return Pending(value)
    if isinstance(value, (asyncio.Future, concurrent.futures.Future)) or asyncio.iscoroutine(value):
        return Pending(wrap_future(value, reactor))
    return Immediate(value)
