"""Discovery collaborator registry.

Backends are lazily imported so that pydbus is only needed when the
AccountsService directory is actually used.
"""

import importlib
from typing import TYPE_CHECKING

from ofono_accounts.exceptions import BackendNotFoundError

if TYPE_CHECKING:
    from ofono_accounts.base_backends import BasePropertyQuery, BaseSimNameDirectory
    from ofono_accounts.config import AccountsConfig

_PROPERTY_BACKENDS: dict[str, str] = {
    "getprop": "ofono_accounts.backends.getprop:GetpropPropertyQuery",
    "none": "ofono_accounts.backends.null:NullPropertyQuery",
}

_DIRECTORY_BACKENDS: dict[str, str] = {
    "accountsservice": "ofono_accounts.backends.accounts_service:AccountsServiceDirectory",
    "none": "ofono_accounts.backends.null:NullSimNameDirectory",
}


def _load(registry: dict[str, str], kind: str, name: str):
    name = name.lower()
    if name not in registry:
        raise BackendNotFoundError(kind, name, list(registry.keys()))

    module_path, class_name = registry[name].rsplit(":", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def get_property_query(config: "AccountsConfig") -> "BasePropertyQuery":
    """Build the property query backend named in the config.

    Raises:
        BackendNotFoundError: If the backend name is not recognized.
    """
    cls = _load(_PROPERTY_BACKENDS, "property", config.property_backend)
    if config.property_backend.lower() == "getprop":
        return cls(getprop_path=config.getprop_path, timeout=config.query_timeout)
    return cls()


def get_sim_directory(config: "AccountsConfig") -> "BaseSimNameDirectory":
    """Build the SIM name directory backend named in the config.

    Raises:
        BackendNotFoundError: If the backend name is not recognized.
    """
    cls = _load(_DIRECTORY_BACKENDS, "directory", config.directory_backend)
    if config.directory_backend.lower() == "accountsservice":
        return cls(timeout=config.query_timeout)
    return cls()
