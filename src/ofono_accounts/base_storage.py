"""Base account storage ABC: the contract between the host account manager
and a storage provider.

The host (Mission Control) holds every provider behind this interface and
merges their accounts into its own store. Providers answer read queries by
pushing key/value pairs back through the host's BaseAccountManager.
"""

from abc import ABC, abstractmethod
from enum import IntFlag
from typing import Mapping, Optional

from ofono_accounts.account_manager import BaseAccountManager


# Mission Control's default plugin priority; higher values are consulted first
STORAGE_PRIORITY_DEFAULT = 0

# Returned by get_restrictions() for accounts the provider does not know
RESTRICTIONS_UNKNOWN = 0xFFFFFFFF


class RestrictionFlags(IntFlag):
    """Which account properties a user interface may not edit."""
    CANNOT_SET_PARAMETERS = 1
    CANNOT_SET_ENABLED = 2
    CANNOT_SET_PRESENCE = 4
    CANNOT_SET_SERVICE = 8


class BaseAccountStorage(ABC):
    """Abstract base for account storage providers."""

    @abstractmethod
    def list(self, manager: Optional[BaseAccountManager] = None) -> list[str]:
        """Return the names of all accounts this provider stores."""
        ...

    @abstractmethod
    def get(
        self,
        manager: BaseAccountManager,
        account_name: str,
        key: Optional[str] = None,
    ) -> bool:
        """Push account settings to the host.

        Args:
            manager: Host collaborator receiving set_value() calls.
            account_name: Account to read.
            key: Single setting to push. None pushes every setting.

        Returns:
            False if the account is unknown, True otherwise.
        """
        ...

    @abstractmethod
    def set(
        self,
        manager: BaseAccountManager,
        account_name: str,
        key: str,
        value: Optional[str],
    ) -> bool:
        """Store a setting. Returns True if the provider accepted it."""
        ...

    @abstractmethod
    def create(
        self,
        manager: BaseAccountManager,
        cm_name: str,
        protocol_name: str,
        params: Mapping[str, str],
    ) -> str:
        """Create a new account and return its name."""
        ...

    @abstractmethod
    def delete(
        self,
        manager: BaseAccountManager,
        account_name: str,
        key: Optional[str] = None,
    ) -> bool:
        """Delete an account, or one of its settings when key is given."""
        ...

    @abstractmethod
    def commit(self, manager: BaseAccountManager) -> bool:
        """Flush pending changes. Returns True if anything was written."""
        ...

    @abstractmethod
    def get_identifier(self, account_name: str) -> Optional[int]:
        """Provider-specific identifier for an account. None if unknown."""
        ...

    @abstractmethod
    def get_restrictions(self, account_name: str) -> int:
        """Bitwise OR of RestrictionFlags for an account."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable provider name (e.g., 'ofono-account')."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable provider description."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Ordering among competing providers; higher is consulted first."""
        ...

    @property
    @abstractmethod
    def provider(self) -> str:
        """Provider/service identifier string."""
        ...

    @property
    def metadata(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "priority": self.priority,
            "provider": self.provider,
        }
