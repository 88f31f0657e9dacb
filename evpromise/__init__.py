"""
evpromise chains evented calls without nesting callbacks, and routes the first failure straight to a catch handler.

    >>> import evpromise
    >>> chain = evpromise.promise(lambda: 5).then(lambda x: x + 1).then(lambda x: x * 2).fulfill()
    >>> chain.get()
    12

"""
import evpromise.logging
import evpromise.settings
from .future import Future, RejectionError, wrap_future
from .gate import Gate
from .promise import Chain, promise
from .reactor import Reactor
from .result import Success, Failure, Immediate, Pending
from ._version import __version__, __version_tuple__
