"""Tests for modem discovery."""

import pytest

from ofono_accounts.config import AccountsConfig
from ofono_accounts.discovery import (
    AccountRecord,
    determine_modem_count,
    discover,
    fetch_sim_names,
    synthesize_records,
)
from ofono_accounts.exceptions import IdentifierTooLongError

BASELINE_KEYS = {
    "manager",
    "protocol",
    "Enabled",
    "ConnectAutomatically",
    "always_dispatch",
    "param-modem-objpath",
}


class TestDetermineModemCount:
    def test_override_bypasses_properties(self, ril_properties):
        count = determine_modem_count(AccountsConfig(modem_count=4), ril_properties)
        assert count == 4
        assert ril_properties.requests == []

    def test_override_zero_and_negative_used_verbatim(self, ril_properties):
        assert determine_modem_count(AccountsConfig(modem_count=0), ril_properties) == 0
        assert determine_modem_count(AccountsConfig(modem_count=-2), ril_properties) == -2

    def test_property_service_unavailable(self, no_properties):
        assert determine_modem_count(AccountsConfig(), no_properties) == 0
        assert no_properties.requests == []

    def test_reads_slot_count(self, ril_properties):
        assert determine_modem_count(AccountsConfig(), ril_properties) == 2
        assert ril_properties.requests == [("rild.libpath", ""), ("ril.num_slots", "1")]

    def test_empty_libpath_means_no_modems(self, make_properties):
        props = make_properties({"rild.libpath": "  \n", "ril.num_slots": "2"})
        assert determine_modem_count(AccountsConfig(), props) == 0
        assert props.requests == [("rild.libpath", "")]

    def test_slot_count_defaults_to_one(self, make_properties):
        props = make_properties({"rild.libpath": "/system/lib/libril.so"})
        assert determine_modem_count(AccountsConfig(), props) == 1

    def test_unparsable_slot_count(self, make_properties):
        props = make_properties({"rild.libpath": "/system/lib/libril.so", "ril.num_slots": "dual"})
        assert determine_modem_count(AccountsConfig(), props) == 0

    def test_property_error_is_non_fatal(self, make_properties):
        props = make_properties(error="getprop: permission denied")
        assert determine_modem_count(AccountsConfig(), props) == 0

    def test_slot_count_error_is_non_fatal(self, make_properties):
        props = make_properties(
            {"rild.libpath": "/system/lib/libril.so", "ril.num_slots": "2"},
            error="getprop ril.num_slots timed out after 5.0s",
            fail_on="ril.num_slots",
        )
        assert determine_modem_count(AccountsConfig(), props) == 0
        assert props.requests == [("rild.libpath", ""), ("ril.num_slots", "1")]


class TestFetchSimNames:
    def test_returns_mapping(self, sim_directory):
        assert fetch_sim_names(sim_directory) == {"/ril_0": "SIM 1", "/ril_1": "Work"}

    def test_failure_yields_empty_mapping(self, make_directory):
        directory = make_directory(error="org.freedesktop.DBus.Error.AccessDenied")
        assert fetch_sim_names(directory) == {}


class TestSynthesizeRecords:
    @pytest.mark.parametrize("count", [0, 1, 2, 5])
    def test_count_records_in_order(self, count):
        records = synthesize_records(count)
        assert len(records) == count
        assert [r.index for r in records] == list(range(count))
        assert len({r.account_name for r in records}) == count

    @pytest.mark.parametrize("count", [0, -1, -10])
    def test_non_positive_count_is_empty(self, count):
        assert synthesize_records(count) == []

    def test_baseline_params(self):
        record = synthesize_records(1)[0]
        assert record.account_name == "ofono/ofono/account0"
        assert set(record.params) == BASELINE_KEYS
        assert record.params["manager"] == "ofono"
        assert record.params["protocol"] == "ofono"
        assert record.params["Enabled"] == "true"
        assert record.params["ConnectAutomatically"] == "true"
        assert record.params["always_dispatch"] == "true"
        assert record.modem_path == "/ril_0"
        assert record.display_name is None

    def test_display_name_only_where_mapped(self):
        records = synthesize_records(3, sim_names={"/ril_2": "Travel", "/ril_7": "Gone"})
        assert records[2].params["DisplayName"] == "Travel"
        assert "DisplayName" not in records[0].params
        assert "DisplayName" not in records[1].params

    def test_custom_prefixes(self):
        record = synthesize_records(2, account_prefix="sim", modem_prefix="hfp_")[1]
        assert record.account_name == "ofono/ofono/sim1"
        assert record.params["param-modem-objpath"] == "/hfp_1"

    def test_empty_prefixes_fall_back(self):
        record = synthesize_records(1, account_prefix="", modem_prefix="")[0]
        assert record.account_name == "ofono/ofono/account0"
        assert record.modem_path == "/ril_0"

    def test_account_name_too_long(self):
        with pytest.raises(IdentifierTooLongError) as exc_info:
            synthesize_records(1, account_prefix="a" * 80)
        assert exc_info.value.limit == 80

    def test_modem_name_too_long(self):
        with pytest.raises(IdentifierTooLongError) as exc_info:
            synthesize_records(1, modem_prefix="m" * 40)
        assert exc_info.value.limit == 40

    def test_names_at_the_ceiling_are_accepted(self):
        # "ofono/ofono/" is 12 characters, "/" plus index is 2
        records = synthesize_records(1, account_prefix="a" * 67, modem_prefix="m" * 38)
        assert len(records[0].account_name) == 80
        assert len(records[0].modem_path) == 40

    def test_params_are_read_only(self):
        record = synthesize_records(1)[0]
        with pytest.raises(TypeError):
            record.params["Enabled"] = "false"

    def test_record_is_frozen(self):
        record = synthesize_records(1)[0]
        with pytest.raises(AttributeError):
            record.index = 3

    def test_deterministic(self, sim_directory):
        names = sim_directory.fetch_sim_names()
        assert synthesize_records(3, sim_names=names) == synthesize_records(3, sim_names=names)


class TestDiscover:
    def test_end_to_end_from_properties(self, ril_properties, sim_directory):
        records = discover(AccountsConfig(), ril_properties, sim_directory)
        assert [r.account_name for r in records] == ["ofono/ofono/account0", "ofono/ofono/account1"]
        assert records[0].display_name == "SIM 1"
        assert records[1].display_name == "Work"

    def test_single_modem_with_sim_name(self, no_properties, make_directory):
        directory = make_directory({"/ril_0": "SIM 1"})
        records = discover(AccountsConfig(modem_count=1), no_properties, directory)
        assert records == [
            AccountRecord(
                account_name="ofono/ofono/account0",
                index=0,
                params={
                    "manager": "ofono",
                    "protocol": "ofono",
                    "Enabled": "true",
                    "ConnectAutomatically": "true",
                    "always_dispatch": "true",
                    "param-modem-objpath": "/ril_0",
                    "DisplayName": "SIM 1",
                },
            )
        ]

    def test_directory_failure_still_discovers(self, ril_properties, make_directory):
        directory = make_directory(error="no system bus")
        records = discover(AccountsConfig(), ril_properties, directory)
        assert len(records) == 2
        assert all(r.display_name is None for r in records)

    def test_no_modems_skips_directory(self, no_properties, sim_directory):
        assert discover(AccountsConfig(), no_properties, sim_directory) == []
        assert sim_directory.calls == 0
