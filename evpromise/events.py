import logging
logger = logging.getLogger("evpromise.events")


class Signal(object):
    def __init__(self, name=None):
        """Synchronous observer list, callbacks are called in the order they connected

        :type name: str
        """
        self.name = name or repr(self)
        self.callbacks = []

    def connect(self, callback, prepend=False):
        logger.debug("(%s) connected %s", self.name, callback)
        if prepend:
            self.callbacks.insert(0, callback)
        else:
            self.callbacks.append(callback)
        return callback

    def emit(self, *args):
        results = []
        for callback in list(self.callbacks):  # copy, a callback may disconnect itself
            try:
                logger.debug("(%s) calling %r with arguments %r", self.name, callback, args)
                results.append(callback(*args))
            except Exception:
                logger.error("(%s) error in handling callback %r with arguments %r", self.name, callback, args)
                raise
        return results

    def disconnect(self, callback):
        self.callbacks.remove(callback)

    def __len__(self):
        return len(self.callbacks)
