import pytest

import evpromise


def test_count(reactor):
    gate = evpromise.Gate(reactor)
    assert gate.is_open
    gate.increment()
    gate.increment()
    assert not gate.is_open
    gate.decrement()
    assert not gate.is_open
    gate.decrement()
    assert gate.is_open
    with pytest.raises(ValueError):
        gate.decrement()


def test_release(reactor):
    gate = evpromise.Gate(reactor)
    gate.increment()
    gate.release()
    assert gate.is_open
    assert gate.count == 1


def test_await_zero_when_open():
    reactor = evpromise.Reactor()
    reactor.close()
    gate = evpromise.Gate(reactor)
    # does not touch the (closed) loop
    gate.await_zero()


@pytest.mark.timeout(10)
def test_await_zero_runs_loop(reactor):
    gate = evpromise.Gate(reactor)
    gate.increment()
    gate.increment()
    reactor.call_later(0.01, gate.decrement)
    reactor.call_later(0.02, gate.decrement)
    gate.await_zero()
    assert gate.count == 0


@pytest.mark.timeout(10)
def test_await_zero_released(reactor):
    gate = evpromise.Gate(reactor)
    gate.increment()
    reactor.call_later(0.01, gate.release)
    gate.await_zero()
    assert gate.count == 1
    assert "released=True" in repr(gate)
