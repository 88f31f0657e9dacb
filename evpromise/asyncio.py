import asyncio
import contextlib

import nest_asyncio


@contextlib.contextmanager
def with_event_loop(event_loop=None):
    '''Step aside from the running loop (if any), so ``event_loop`` can be run to completion from this thread'''
    loop_running_previous = asyncio.events._get_running_loop()
    if event_loop is None:
        event_loop = asyncio.new_event_loop()
    # private API, but present from CPython 3.3ish-3.10+
    asyncio.events._set_running_loop(None)
    try:
        yield event_loop
    finally:
        asyncio.events._set_running_loop(loop_running_previous)


def just_run(coro, event_loop):
    '''Run the coroutine to completion on ``event_loop``, even when that loop is already running (re-entrant)'''
    nest_asyncio.apply(event_loop)
    return event_loop.run_until_complete(coro)
