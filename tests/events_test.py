import pytest

import evpromise.events
from common import CallbackCounter


def test_emit_in_order():
    calls = []
    signal = evpromise.events.Signal("test")
    signal.connect(lambda x: calls.append(("first", x)) or 1)
    signal.connect(lambda x: calls.append(("prepended", x)) or 2, prepend=True)
    assert signal.emit(5) == [2, 1]
    assert calls == [("prepended", 5), ("first", 5)]
    assert len(signal) == 2


def test_disconnect():
    callback = CallbackCounter()
    signal = evpromise.events.Signal("test")
    signal.connect(callback)
    signal.emit()
    signal.disconnect(callback)
    signal.emit()
    assert callback.counter == 1


def test_error_propagates():
    def fail():
        raise ValueError("nope")
    signal = evpromise.events.Signal("test")
    signal.connect(fail)
    with pytest.raises(ValueError):
        signal.emit()
