"""ofono-accounts: read-only ril modem accounts for Telepathy Mission Control.

Discovers the modems exposed by the Android RIL stack and offers one ofono
account per modem to the host account manager.
"""

__version__ = "0.1.0"

from ofono_accounts.account_manager import BaseAccountManager, RecordingAccountManager
from ofono_accounts.base_backends import BasePropertyQuery, BaseSimNameDirectory
from ofono_accounts.base_storage import (
    BaseAccountStorage,
    RestrictionFlags,
    RESTRICTIONS_UNKNOWN,
)
from ofono_accounts.config import AccountsConfig
from ofono_accounts.discovery import (
    AccountRecord,
    determine_modem_count,
    discover,
    fetch_sim_names,
    synthesize_records,
)
from ofono_accounts.storage import OfonoAccountStorage
from ofono_accounts.exceptions import (
    AccountStorageError,
    ConfigError,
    BackendNotFoundError,
    PropertyQueryError,
    DirectoryServiceError,
    IdentifierTooLongError,
    AccountCreationNotSupportedError,
)

__all__ = [
    "BaseAccountManager",
    "RecordingAccountManager",
    "BasePropertyQuery",
    "BaseSimNameDirectory",
    "BaseAccountStorage",
    "RestrictionFlags",
    "RESTRICTIONS_UNKNOWN",
    "AccountsConfig",
    "AccountRecord",
    "determine_modem_count",
    "discover",
    "fetch_sim_names",
    "synthesize_records",
    "OfonoAccountStorage",
    "AccountStorageError",
    "ConfigError",
    "BackendNotFoundError",
    "PropertyQueryError",
    "DirectoryServiceError",
    "IdentifierTooLongError",
    "AccountCreationNotSupportedError",
]
