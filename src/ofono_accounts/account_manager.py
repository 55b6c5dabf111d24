"""Host account-manager collaborator.

Storage providers never return account settings directly; they push each
(account, key, value) triple into the host's account manager. The recording
implementation here stands in for the host in the CLI, the HTTP inspection
API, and tests.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class BaseAccountManager(ABC):
    """Receives settings pushed by a storage provider."""

    @abstractmethod
    def set_value(self, account_name: str, key: str, value: Optional[str]) -> None:
        ...


class RecordingAccountManager(BaseAccountManager):
    """Collects pushed settings in memory, in push order."""

    def __init__(self):
        self.calls: list[tuple[str, str, Optional[str]]] = []

    def set_value(self, account_name: str, key: str, value: Optional[str]) -> None:
        logger.debug("set_value: %s, %s %s", account_name, key, value)
        self.calls.append((account_name, key, value))

    def values_for(self, account_name: str) -> dict[str, Optional[str]]:
        """Settings pushed for one account, later pushes winning."""
        return {key: value for name, key, value in self.calls if name == account_name}

    def clear(self) -> None:
        self.calls.clear()
