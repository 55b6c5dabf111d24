"""Read-only ofono account storage provider.

Serves the accounts synthesized by discovery to the host account manager.
The record list is fixed at construction: writes are refused, nothing is
ever committed, and every account reports itself as fully restricted.

Usage:
    storage = OfonoAccountStorage.from_config(AccountsConfig.from_env())
    manager = RecordingAccountManager()
    for name in storage.list(manager):
        storage.get(manager, name)
"""

import logging
from typing import Iterable, Mapping, Optional

from ofono_accounts.account_manager import BaseAccountManager
from ofono_accounts.backends import get_property_query, get_sim_directory
from ofono_accounts.base_storage import (
    BaseAccountStorage,
    RESTRICTIONS_UNKNOWN,
    RestrictionFlags,
    STORAGE_PRIORITY_DEFAULT,
)
from ofono_accounts.config import AccountsConfig
from ofono_accounts.discovery import AccountRecord, discover
from ofono_accounts.exceptions import AccountCreationNotSupportedError

logger = logging.getLogger(__name__)

PLUGIN_NAME = "ofono-account"
PLUGIN_DESCRIPTION = "Provide ril modem accounts for telepathy-ofono"
PLUGIN_PRIORITY = STORAGE_PRIORITY_DEFAULT - 10
PLUGIN_PROVIDER = "im.telepathy.Account.Storage.Ofono"

OFONO_RESTRICTIONS = (
    RestrictionFlags.CANNOT_SET_PARAMETERS
    | RestrictionFlags.CANNOT_SET_ENABLED
    | RestrictionFlags.CANNOT_SET_PRESENCE
    | RestrictionFlags.CANNOT_SET_SERVICE
)


class OfonoAccountStorage(BaseAccountStorage):
    """Storage provider over a fixed tuple of AccountRecords."""

    def __init__(self, records: Iterable[AccountRecord] = ()):
        self._records: tuple[AccountRecord, ...] = tuple(records)
        logger.debug("MC ril ofono accounts plugin initialized: %d account(s)", len(self._records))

    @classmethod
    def from_config(cls, config: AccountsConfig) -> "OfonoAccountStorage":
        """Discover modems with the backends named in the config.

        Raises:
            BackendNotFoundError: If a configured backend is unknown.
            IdentifierTooLongError: If a prefix override is too long.
        """
        records = discover(config, get_property_query(config), get_sim_directory(config))
        return cls(records)

    @property
    def records(self) -> tuple[AccountRecord, ...]:
        return self._records

    def _find(self, account_name: str) -> Optional[AccountRecord]:
        for record in self._records:
            if record.account_name == account_name:
                return record
        return None

    def list(self, manager: Optional[BaseAccountManager] = None) -> list[str]:
        return [record.account_name for record in self._records]

    def get(
        self,
        manager: BaseAccountManager,
        account_name: str,
        key: Optional[str] = None,
    ) -> bool:
        record = self._find(account_name)
        if record is None:
            return False

        if key is None:
            for itkey, value in record.params.items():
                logger.debug("get: %s, %s %s", account_name, itkey, value)
                manager.set_value(account_name, itkey, value)
        else:
            value = record.params.get(key)
            logger.debug("get: %s, %s %s", account_name, key, value)
            manager.set_value(account_name, key, value)
        return True

    def set(
        self,
        manager: BaseAccountManager,
        account_name: str,
        key: str,
        value: Optional[str],
    ) -> bool:
        logger.debug("set: %s, %s (rejected)", account_name, key)
        return False

    def create(
        self,
        manager: BaseAccountManager,
        cm_name: str,
        protocol_name: str,
        params: Mapping[str, str],
    ) -> str:
        raise AccountCreationNotSupportedError(
            "Ofono ril account manager cannot create accounts"
        )

    def delete(
        self,
        manager: BaseAccountManager,
        account_name: str,
        key: Optional[str] = None,
    ) -> bool:
        logger.debug("delete: %s, %s", account_name, key)
        return False

    def commit(self, manager: BaseAccountManager) -> bool:
        logger.debug("commit")
        return False

    def get_identifier(self, account_name: str) -> Optional[int]:
        record = self._find(account_name)
        if record is None:
            return None
        logger.debug("get_identifier: %s", account_name)
        return record.index

    def get_restrictions(self, account_name: str) -> int:
        if self._find(account_name) is None:
            return RESTRICTIONS_UNKNOWN
        return int(OFONO_RESTRICTIONS)

    @property
    def name(self) -> str:
        return PLUGIN_NAME

    @property
    def description(self) -> str:
        return PLUGIN_DESCRIPTION

    @property
    def priority(self) -> int:
        return PLUGIN_PRIORITY

    @property
    def provider(self) -> str:
        return PLUGIN_PROVIDER
