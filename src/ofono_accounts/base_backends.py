"""Base collaborator ABCs used by modem discovery.

Discovery needs two things from the system: a property lookup (to learn
whether a RIL modem stack is present and how many slots it has) and a
directory of user-assigned SIM names. Both are best-effort; failures are
reported with the exceptions below and absorbed by discovery.
"""

from abc import ABC, abstractmethod


class BasePropertyQuery(ABC):
    """System property lookup, e.g. Android's getprop."""

    @abstractmethod
    def available(self) -> bool:
        """Whether the property service can be queried at all."""
        ...

    @abstractmethod
    def get(self, name: str, default: str = "") -> str:
        """Read a property.

        Args:
            name: Property name (e.g., 'ril.num_slots').
            default: Value returned by the service when the property is unset.

        Returns:
            The raw property value (may contain surrounding whitespace).

        Raises:
            PropertyQueryError: If the service could not be invoked.
        """
        ...


class BaseSimNameDirectory(ABC):
    """Maps modem object paths (e.g. '/ril_0') to SIM display names."""

    @abstractmethod
    def fetch_sim_names(self) -> dict[str, str]:
        """Fetch the mapping for the current user.

        Raises:
            DirectoryServiceError: On transport, permission or decode failure.
        """
        ...
