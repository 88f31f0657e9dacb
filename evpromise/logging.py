"""Logging for evpromise.

The package logs to these loggers:

* ``evpromise.promise``: unhandled rejections at the error level; registered steps, skipped steps and
  dropped second failures at the debug level.
* ``evpromise.gate``: the counting of the completion gate (debug).
* ``evpromise.future``: completions that came too late and were ignored (debug).
* ``evpromise.reactor``: what the reactor runs, and how (debug).

:func:`setup` is called when evpromise is imported, and is configured by ``evpromise.settings.main.logging``
(the ``EVPROMISE_LOGGING_*`` environment variables). ``EVPROMISE_DEBUG=evpromise.gate,evpromise.promise`` turns
on debug logging for just those loggers, ``EVPROMISE_DEBUG=1`` for all of them.
"""
import logging
import os

import evpromise.settings

logger = logging.getLogger('evpromise')
log_handler: logging.Handler = None

TRACE_LOGGERS = ["evpromise.promise", "evpromise.gate", "evpromise.future", "evpromise.reactor"]


def _logger_names(value):
    names = [name.strip() for name in value.split(",") if name.strip()]
    if names and all(name.startswith("evpromise") for name in names):
        return names
    # e.g. '1' or 'true'
    return ["evpromise"]


def set_log_level(loggers, level):
    for name in loggers:
        logging.getLogger(name).setLevel(level)


def trace_chains():
    """Log at the debug level what chains, gates, futures and reactors do"""
    set_log_level(TRACE_LOGGERS, logging.DEBUG)


def remove_handler():
    """Silence evpromise: remove our handler, records only reach handlers of the application"""
    global log_handler
    logger.removeHandler(log_handler)
    logger.addHandler(logging.NullHandler())
    log_handler = None


def reset():
    '''Undo :func:`setup`, so it can be called again after changing the settings'''
    global log_handler
    for handler in list(logger.handlers):
        if handler is log_handler or isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    log_handler = None
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("evpromise."):
            logging.getLogger(name).setLevel(logging.NOTSET)


def _make_handler(rich):
    if rich:
        from rich.logging import RichHandler
        return RichHandler()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s:%(threadName)s:%(name)s:%(message)s'))
    return handler


def setup():
    global log_handler
    config = evpromise.settings.main.logging
    if config.setup:
        log_handler = _make_handler(config.rich)
        log_handler.setLevel(logging.DEBUG)
        logger.addHandler(log_handler)

    # unhandled rejections are errors, so they show up even without configuration
    logger.setLevel(logging.ERROR)
    for level, value in [(logging.ERROR, config.error), (logging.WARNING, config.warning),
                         (logging.INFO, config.info), (logging.DEBUG, config.debug)]:
        if value:
            set_log_level(_logger_names(value), level)
    # takes precedence over EVPROMISE_LOGGING_DEBUG
    debug = os.environ.get('EVPROMISE_DEBUG', '')
    if debug:
        set_log_level(_logger_names(debug), logging.DEBUG)


setup()
