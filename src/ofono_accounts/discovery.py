"""Modem discovery: turns system state into ofono account records.

Discovery runs once at provider startup:

  1. determine_modem_count()  override, or rild.libpath + ril.num_slots
  2. fetch_sim_names()  SIM display names from AccountsService
  3. synthesize_records()  one AccountRecord per modem index

Every external call is best-effort. A missing property service or an
unreachable AccountsService degrades to "no modems" or "no names"; only a
synthesized identifier exceeding its length ceiling stops discovery.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ofono_accounts.base_backends import BasePropertyQuery, BaseSimNameDirectory
from ofono_accounts.config import (
    AccountsConfig,
    DEFAULT_ACCOUNT_PREFIX,
    DEFAULT_MODEM_PREFIX,
)
from ofono_accounts.exceptions import (
    DirectoryServiceError,
    IdentifierTooLongError,
    PropertyQueryError,
)

logger = logging.getLogger(__name__)

BACKEND = "ofono"
ACCOUNT_NAME_MAX_LEN = 80
MODEM_NAME_MAX_LEN = 40

RIL_LIBPATH_PROPERTY = "rild.libpath"
RIL_NUM_SLOTS_PROPERTY = "ril.num_slots"

PARAM_MODEM_OBJPATH = "param-modem-objpath"
PARAM_DISPLAY_NAME = "DisplayName"


@dataclass(frozen=True)
class AccountRecord:
    """One synthesized account per discovered modem."""
    account_name: str                   # e.g. "ofono/ofono/account0"
    index: int                          # modem ordinal, doubles as identifier
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def modem_path(self) -> str:
        return self.params[PARAM_MODEM_OBJPATH]

    @property
    def display_name(self) -> str | None:
        return self.params.get(PARAM_DISPLAY_NAME)


def determine_modem_count(config: AccountsConfig, property_query: BasePropertyQuery) -> int:
    """Number of modems to synthesize accounts for.

    An explicit override wins verbatim. Otherwise the RIL properties are
    consulted; any failure counts as zero modems.
    """
    if config.modem_count is not None:
        logger.debug("forced number of modems: %d", config.modem_count)
        return config.modem_count

    if not property_query.available():
        logger.debug("Property service unavailable, no modems")
        return 0

    try:
        libpath = property_query.get(RIL_LIBPATH_PROPERTY, "").strip()
        if not libpath:
            logger.debug("%s is empty, no RIL modems", RIL_LIBPATH_PROPERTY)
            return 0
        slots = property_query.get(RIL_NUM_SLOTS_PROPERTY, "1").strip()
    except PropertyQueryError as e:
        logger.debug("%s", e)
        return 0

    try:
        return int(slots)
    except ValueError:
        logger.warning("Unparsable %s value %r, no modems", RIL_NUM_SLOTS_PROPERTY, slots)
        return 0


def fetch_sim_names(sim_directory: BaseSimNameDirectory) -> dict[str, str]:
    """SIM display names keyed by modem object path; empty on failure."""
    try:
        return dict(sim_directory.fetch_sim_names())
    except DirectoryServiceError as e:
        logger.warning("%s", e)
        return {}


def _check_length(kind: str, value: str, limit: int) -> str:
    if len(value) > limit:
        raise IdentifierTooLongError(kind, value, limit)
    return value


def synthesize_records(
    count: int,
    account_prefix: str = DEFAULT_ACCOUNT_PREFIX,
    modem_prefix: str = DEFAULT_MODEM_PREFIX,
    sim_names: Mapping[str, str] | None = None,
) -> list[AccountRecord]:
    """Build one AccountRecord per modem index in 0..count-1.

    Raises:
        IdentifierTooLongError: If an account name exceeds 80 characters or
            a modem object path exceeds 40.
    """
    account_prefix = account_prefix or DEFAULT_ACCOUNT_PREFIX
    modem_prefix = modem_prefix or DEFAULT_MODEM_PREFIX
    sim_names = sim_names or {}

    records = []
    for index in range(count):
        account_name = _check_length(
            "Account name", f"{BACKEND}/{BACKEND}/{account_prefix}{index}", ACCOUNT_NAME_MAX_LEN,
        )
        modem_path = _check_length("Modem name", f"/{modem_prefix}{index}", MODEM_NAME_MAX_LEN)

        params = {
            "manager": BACKEND,
            "protocol": BACKEND,
            "Enabled": "true",
            "ConnectAutomatically": "true",
            "always_dispatch": "true",
            PARAM_MODEM_OBJPATH: modem_path,
        }
        if modem_path in sim_names:
            params[PARAM_DISPLAY_NAME] = sim_names[modem_path]

        records.append(AccountRecord(account_name=account_name, index=index, params=params))

    return records


def discover(
    config: AccountsConfig,
    property_query: BasePropertyQuery,
    sim_directory: BaseSimNameDirectory,
) -> list[AccountRecord]:
    """Run the full discovery pipeline once."""
    count = determine_modem_count(config, property_query)
    sim_names = fetch_sim_names(sim_directory) if count > 0 else {}
    records = synthesize_records(count, config.account_prefix, config.modem_prefix, sim_names)
    logger.info(
        "Discovered %d modem account(s): %s",
        len(records), [r.account_name for r in records],
    )
    return records
