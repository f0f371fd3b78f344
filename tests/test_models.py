"""Tests for RoleSet."""

from rolesync.models import RoleSet


class TestRoleSet:
    def test_dedups_preserving_order(self):
        roles = RoleSet(["blue", "net", "blue", "web"])
        assert roles.to_list() == ["blue", "net", "web"]

    def test_strips_and_drops_blank(self):
        roles = RoleSet(["  blue ", "", "   ", "blue"])
        assert roles.to_list() == ["blue"]

    def test_equality_ignores_order(self):
        assert RoleSet(["a", "b"]) == RoleSet(["b", "a"])
        assert RoleSet(["a", "b"]) == {"a", "b"}
        assert RoleSet(["a"]) != RoleSet(["a", "b"])

    def test_union_appends_new(self):
        assert RoleSet(["a", "b"]).union(["b", "c"]).to_list() == ["a", "b", "c"]

    def test_difference_and_intersection(self):
        roles = RoleSet(["a", "b", "c"])
        assert roles.difference(["b", "x"]).to_list() == ["a", "c"]
        assert roles.intersection(["c", "a", "x"]).to_list() == ["a", "c"]

    def test_container_protocol(self):
        roles = RoleSet(["a"])
        assert "a" in roles
        assert "b" not in roles
        assert len(roles) == 1
        assert not RoleSet()
        assert hash(RoleSet(["a", "b"])) == hash(RoleSet(["b", "a"]))
