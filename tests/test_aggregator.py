"""Tests for the config aggregator."""

from sshconfgen.aggregator import aggregate, build_block
from sshconfgen.types import ConnectionType, HostRecord


def host(name, **kwargs):
    return HostRecord(name=name, host=kwargs.pop("host", name), **kwargs)


class TestAggregate:
    def test_only_emitted_connection_types(self):
        hosts = [
            host("a"),
            host("b", connection_type=ConnectionType.OTHER),
            host("c", connection_type=ConnectionType.NETWORK_CLI),
        ]
        blocks = aggregate(hosts)
        assert [b.name for b in blocks] == ["a", "c"]

    def test_order_preserved(self):
        names = ["zeta", "alpha", "mid"]
        assert [b.name for b in aggregate([host(n) for n in names])] == names

    def test_same_address_not_deduplicated(self):
        blocks = aggregate([host("a", host="10.0.0.1"), host("b", host="10.0.0.1")])
        assert len(blocks) == 2

    def test_empty(self):
        assert aggregate([]) == []

    def test_failure_isolated_per_host(self):
        blocks = aggregate(
            [
                host("good1", common_args=("-i", "key")),
                host("bad", common_args=("-i",)),
                host("good2"),
            ]
        )
        assert [b.failed for b in blocks] == [False, True, False]
        assert blocks[0].options[0].directive == "IdentityFile"


class TestBuildBlock:
    def test_no_common_args(self):
        block = build_block(host("a"))
        assert block.options == []
        assert block.failure_comment is None

    def test_copies_connection_attributes(self):
        block = build_block(host("a", host="10.0.0.1", user="deploy", port=2222))
        assert (block.host, block.user, block.port) == ("10.0.0.1", "deploy", 2222)

    def test_malformed_args_single_comment(self):
        block = build_block(host("my_host_1", common_args=("-o", "ProxyCommand")))
        assert block.options == []
        assert block.failure_comment == (
            "# Script could not generate configuration for host my_host_1, "
            "check connection arguments"
        )

    def test_string_args(self):
        block = build_block(host("a", common_args="-o 'ProxyJump=user@bastion' -C"))
        assert [(o.directive, o.value) for o in block.options] == [
            ("ProxyJump", "user@bastion"),
            ("Compression", "yes"),
        ]
