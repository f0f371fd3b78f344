"""Tests for role catalog browsing."""

from rolesync.catalog import describe_roles, list_available_roles
from tests.conftest import FakeProvider


class TestCatalog:
    def test_list_available_roles(self):
        provider = FakeProvider({"blue": [], "net": []})
        assert list_available_roles(provider) == ["blue", "net"]

    def test_describe_all_roles(self):
        provider = FakeProvider({"blue": ["wireshark", "nmap", "nmap"], "empty": []})
        listings = describe_roles(provider)
        assert [(x.role, x.tools, x.error) for x in listings] == [
            ("blue", ["nmap", "wireshark"], None),
            ("empty", [], None),
        ]

    def test_failing_role_reported_inline(self):
        provider = FakeProvider({"blue": ["nmap"], "net": ["tcpdump"]}, failing=["blue"])
        listings = describe_roles(provider, ["blue", "net"])
        assert listings[0].error is not None
        assert "connection reset" in listings[0].error
        assert listings[1].tools == ["tcpdump"]

    def test_no_roles(self):
        assert describe_roles(FakeProvider(), []) == []
