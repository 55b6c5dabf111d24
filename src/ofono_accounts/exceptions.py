"""Exception hierarchy for ofono-accounts."""


class AccountStorageError(Exception):
    """Base exception for all ofono-accounts errors."""
    pass


class ConfigError(AccountStorageError):
    """Error loading or parsing the configuration file."""
    pass


class BackendNotFoundError(AccountStorageError):
    """The configured collaborator backend name is not registered."""

    def __init__(self, kind: str, name: str, available: list[str]):
        self.kind = kind
        self.name = name
        self.available = available
        super().__init__(f"Unknown {kind} backend: {name!r}. Available: {available}")


class PropertyQueryError(AccountStorageError):
    """The system property service could not be invoked."""
    pass


class DirectoryServiceError(AccountStorageError):
    """The SIM name directory (AccountsService) request failed."""
    pass


class IdentifierTooLongError(AccountStorageError):
    """A synthesized identifier exceeds its length ceiling.

    Raised at startup; it points at a broken prefix override rather than a
    transient condition.
    """

    def __init__(self, kind: str, value: str, limit: int):
        self.kind = kind
        self.value = value
        self.limit = limit
        super().__init__(f"{kind} {value!r} was too long ({len(value)} > {limit})")


class AccountCreationNotSupportedError(AccountStorageError):
    """Accounts cannot be created through this storage provider."""

    def __init__(self, message: str, code: str = "InvalidArgument"):
        self.code = code
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}
