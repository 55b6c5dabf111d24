"""SIM display names from the freedesktop AccountsService.

The phone settings store user-assigned SIM names as a property of the
current user's AccountsService object:

  bus name:  org.freedesktop.Accounts
  path:      /org/freedesktop/Accounts/User<uid>
  interface: com.ubuntu.touch.AccountsService.Phone
  property:  SimNames  (a{ss}, modem object path -> display name)

e.g. {"/ril_0": "Work", "/ril_1": "Personal"}
"""

import logging
import os
from typing import Callable, Optional

from ofono_accounts.base_backends import BaseSimNameDirectory
from ofono_accounts.exceptions import DirectoryServiceError, IdentifierTooLongError

logger = logging.getLogger(__name__)

ACCOUNTS_SERVICE = "org.freedesktop.Accounts"
ACCOUNTS_USER_PATH = "/org/freedesktop/Accounts/User{uid}"
DBUS_PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
PHONE_INTERFACE = "com.ubuntu.touch.AccountsService.Phone"
SIM_NAMES_PROPERTY = "SimNames"

DBUS_PATH_MAX_LEN = 80


def user_object_path(uid: int) -> str:
    """AccountsService object path for a user id."""
    path = ACCOUNTS_USER_PATH.format(uid=uid)
    if len(path) > DBUS_PATH_MAX_LEN:
        raise IdentifierTooLongError("D-Bus path", path, DBUS_PATH_MAX_LEN)
    return path


def decode_sim_names(reply) -> dict[str, str]:
    """Convert an unpacked a{ss} reply into a plain dict."""
    if not hasattr(reply, "items"):
        raise DirectoryServiceError(
            f"Unexpected {SIM_NAMES_PROPERTY} reply type: {type(reply).__name__}"
        )
    sim_names = {}
    for key, value in reply.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise DirectoryServiceError(
                f"Unexpected {SIM_NAMES_PROPERTY} entry: {key!r} -> {value!r}"
            )
        sim_names[key] = value
    return sim_names


def _system_bus():
    import pydbus
    return pydbus.SystemBus()


class AccountsServiceDirectory(BaseSimNameDirectory):
    """Reads SimNames over the D-Bus system bus with pydbus."""

    def __init__(
        self,
        uid: Optional[int] = None,
        timeout: float = 5.0,
        bus_factory: Optional[Callable] = None,
    ):
        self.uid = os.getuid() if uid is None else uid
        self.timeout = timeout
        self._bus_factory = bus_factory or _system_bus

    def fetch_sim_names(self) -> dict[str, str]:
        object_path = user_object_path(self.uid)

        try:
            bus = self._bus_factory()
        except Exception as e:
            raise DirectoryServiceError(f"Failed to get system bus: {e}") from e

        # Leaving the block releases the connection on every path
        with bus:
            try:
                accounts = bus.get(ACCOUNTS_SERVICE, object_path)
                reply = accounts[DBUS_PROPERTIES_INTERFACE].Get(
                    PHONE_INTERFACE, SIM_NAMES_PROPERTY, timeout=self.timeout,
                )
            except Exception as e:
                raise DirectoryServiceError(
                    f"Failed to get {SIM_NAMES_PROPERTY} property: {e}"
                ) from e

        sim_names = decode_sim_names(reply)
        logger.debug("AccountsService: %d SIM names for %s", len(sim_names), object_path)
        return sim_names
