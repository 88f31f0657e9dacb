import pytest

import evpromise
from evpromise.promise import Chain


@pytest.fixture
def reactor():
    reactor = evpromise.Reactor()
    yield reactor
    reactor.close()


@pytest.fixture(autouse=True)
def clear_unhandled():
    yield
    Chain.unhandled_exceptions.clear()
