"""Example: a minimal host that merges ofono accounts into its own store.

This example shows how an account manager process consumes the storage
provider:
  - discover modems once at startup
  - list the provider's accounts and pull each one's settings
  - honour the restriction flags when deciding what a UI may edit

Usage:
  FORCE_RIL_NUM_MODEMS=2 python examples/host_integration.py
"""

import logging
from typing import Optional

from ofono_accounts import (
    AccountsConfig,
    BaseAccountManager,
    OfonoAccountStorage,
    RestrictionFlags,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class MergedAccountStore(BaseAccountManager):
    """The host's own account table, filled by storage providers."""

    def __init__(self):
        self.accounts: dict[str, dict[str, Optional[str]]] = {}

    def set_value(self, account_name: str, key: str, value: Optional[str]) -> None:
        self.accounts.setdefault(account_name, {})[key] = value


def main() -> None:
    config = AccountsConfig.from_yaml()
    storage = OfonoAccountStorage.from_config(config)
    store = MergedAccountStore()

    logger.info("Provider %s (priority %d)", storage.name, storage.priority)
    for account_name in storage.list(store):
        storage.get(store, account_name)

        restrictions = RestrictionFlags(storage.get_restrictions(account_name))
        editable = RestrictionFlags.CANNOT_SET_PARAMETERS not in restrictions
        params = store.accounts[account_name]
        logger.info(
            "%s: modem=%s name=%s editable=%s",
            account_name,
            params.get("param-modem-objpath"),
            params.get("DisplayName", "(none)"),
            editable,
        )


if __name__ == "__main__":
    main()
