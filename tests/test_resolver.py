"""Tests for the host resolver."""

import logging

import pytest
from pydantic import ValidationError

from sshconfgen.config import HostDefaults
from sshconfgen.errors import DuplicateHostName, InventoryError, MissingRequiredAttribute
from sshconfgen.inventory import resolve, resolve_host
from sshconfgen.types import ConnectionType, RawHostInput


class TestResolveHost:
    def test_builtin_defaults(self):
        record = resolve_host(RawHostInput(name="web1", host="10.0.0.1"))
        assert record.port == 22
        assert record.connection_type == ConnectionType.SSH
        assert record.user is None
        assert record.identity_file is None
        assert record.common_args == ()

    def test_host_falls_back_to_name(self):
        record = resolve_host(RawHostInput(name="db.example.org"))
        assert record.host == "db.example.org"

    def test_name_falls_back_to_host(self):
        record = resolve_host(RawHostInput(host="10.0.0.5"))
        assert record.name == "10.0.0.5"

    def test_missing_host_and_name(self):
        with pytest.raises(MissingRequiredAttribute) as exc:
            resolve_host(RawHostInput(user="root"))
        assert exc.value.attribute == "host"

    def test_blank_values_are_absent(self):
        record = resolve_host(RawHostInput(name="web1", user="", identity_file="  "))
        assert record.user is None
        assert record.identity_file is None

    def test_blank_name_and_host_is_missing(self):
        with pytest.raises(MissingRequiredAttribute):
            resolve_host(RawHostInput(name="", host=""))

    def test_defaults_are_inherited(self):
        defaults = HostDefaults(user="admin", port=2200, identity_file="~/.ssh/ops")
        record = resolve_host(RawHostInput(name="web1"), defaults)
        assert record.user == "admin"
        assert record.port == 2200
        assert record.identity_file == "~/.ssh/ops"

    def test_host_values_override_defaults(self):
        defaults = HostDefaults(user="admin", port=2200, common_args="-A")
        raw = RawHostInput(name="web1", user="deploy", port=22, common_args=["-C"])
        record = resolve_host(raw, defaults)
        assert record.user == "deploy"
        assert record.port == 22
        assert record.common_args == ("-C",)

    def test_default_common_args(self):
        record = resolve_host(RawHostInput(name="web1"), HostDefaults(common_args="-A"))
        assert record.common_args == "-A"

    def test_port_string_is_coerced(self):
        assert resolve_host(RawHostInput(name="a", port="2222")).port == 2222

    def test_invalid_port_rejected(self):
        with pytest.raises(ValidationError):
            RawHostInput(name="a", port=70000)

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("ssh", ConnectionType.SSH),
            ("network_cli", ConnectionType.NETWORK_CLI),
            ("local", ConnectionType.OTHER),
            ("winrm", ConnectionType.OTHER),
            (None, ConnectionType.SSH),
        ],
    )
    def test_connection_type(self, value, expected):
        record = resolve_host(RawHostInput(name="a", connection_type=value))
        assert record.connection_type == expected

    def test_record_is_immutable(self):
        record = resolve_host(RawHostInput(name="a"))
        with pytest.raises(ValidationError):
            record.port = 2222

    def test_whitespace_in_name_rejected(self):
        with pytest.raises(InventoryError, match="whitespace"):
            resolve_host(RawHostInput(name="my host", host="10.0.0.1"))

    @pytest.mark.parametrize(
        "attrs",
        [
            {"name": "a\nHost"},
            {"name": "a", "host": "10.0.0.1\nHost *"},
            {"name": "a", "user": "root\r"},
            {"name": "a", "identity_file": 'key"file'},
        ],
    )
    def test_line_breaks_and_quotes_rejected(self, attrs):
        with pytest.raises(InventoryError):
            resolve_host(RawHostInput(**attrs))

    def test_line_break_in_default_rejected(self):
        with pytest.raises(InventoryError, match="user"):
            resolve_host(RawHostInput(name="a"), HostDefaults(user="ops\nHost *"))

    def test_host_with_spaces_allowed(self):
        assert resolve_host(RawHostInput(name="a", host="my host")).host == "my host"

    def test_unrendered_template_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolve_host(RawHostInput(name="a", host="{{ hostvars['a'].ip }}"))
        assert "unrendered template" in caplog.text


class TestResolve:
    def test_order_preserved(self):
        raw = [RawHostInput(name=n) for n in ["c", "a", "b"]]
        assert [r.name for r in resolve(raw)] == ["c", "a", "b"]

    def test_empty(self):
        assert resolve([]) == []

    def test_duplicate_names(self):
        raw = [RawHostInput(name="a", host="1.1.1.1"), RawHostInput(name="a", host="2.2.2.2")]
        with pytest.raises(DuplicateHostName):
            resolve(raw)

    def test_same_address_different_names(self):
        raw = [RawHostInput(name="a", host="1.1.1.1"), RawHostInput(name="b", host="1.1.1.1")]
        assert len(resolve(raw)) == 2

    def test_missing_attribute_aborts(self):
        raw = [RawHostInput(name="a"), RawHostInput(port=22)]
        with pytest.raises(MissingRequiredAttribute):
            resolve(raw)
