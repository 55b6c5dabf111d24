"""Shared test fixtures."""

import pytest

from ofono_accounts.account_manager import RecordingAccountManager
from ofono_accounts.base_backends import BasePropertyQuery, BaseSimNameDirectory
from ofono_accounts.exceptions import DirectoryServiceError, PropertyQueryError


class FakePropertyQuery(BasePropertyQuery):
    """In-memory property service; unset properties return the default."""

    def __init__(self, props=None, available=True, error=None, fail_on=None):
        self.props = props or {}
        self._available = available
        self.error = error
        self.fail_on = fail_on
        self.requests = []

    def available(self):
        return self._available

    def get(self, name, default=""):
        self.requests.append((name, default))
        if self.error is not None and self.fail_on in (None, name):
            raise PropertyQueryError(self.error)
        return self.props.get(name, default)


class FakeSimNameDirectory(BaseSimNameDirectory):
    def __init__(self, sim_names=None, error=None):
        self.sim_names = sim_names or {}
        self.error = error
        self.calls = 0

    def fetch_sim_names(self):
        self.calls += 1
        if self.error is not None:
            raise DirectoryServiceError(self.error)
        return dict(self.sim_names)


@pytest.fixture
def manager():
    return RecordingAccountManager()


@pytest.fixture
def ril_properties():
    """A dual-SIM device with a RIL library configured."""
    return FakePropertyQuery({
        "rild.libpath": "/system/lib/libril-qc-qmi-1.so\n",
        "ril.num_slots": "2\n",
    })


@pytest.fixture
def no_properties():
    return FakePropertyQuery(available=False)


@pytest.fixture
def empty_directory():
    return FakeSimNameDirectory()


@pytest.fixture
def sim_directory():
    return FakeSimNameDirectory({"/ril_0": "SIM 1", "/ril_1": "Work"})


@pytest.fixture
def make_properties():
    """Factory for in-memory property services."""
    return FakePropertyQuery


@pytest.fixture
def make_directory():
    """Factory for in-memory SIM name directories."""
    return FakeSimNameDirectory
