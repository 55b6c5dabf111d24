"""Null collaborators for hosts without a RIL stack or AccountsService."""

from ofono_accounts.base_backends import BasePropertyQuery, BaseSimNameDirectory


class NullPropertyQuery(BasePropertyQuery):
    """A property service that is never available."""

    def available(self) -> bool:
        return False

    def get(self, name: str, default: str = "") -> str:
        return default


class NullSimNameDirectory(BaseSimNameDirectory):
    """A directory with no SIM names."""

    def fetch_sim_names(self) -> dict[str, str]:
        return {}
