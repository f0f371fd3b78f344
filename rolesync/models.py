"""Core value types: role sets and sync operations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import StrEnum


class Operation(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    SET = "set"


class RoleSet:
    """Insertion-ordered, duplicate-free, immutable set of role ids.

    Order only matters for how the set is written to disk. Equality ignores
    it. Ids are stripped of surrounding whitespace and blank ids are dropped.
    """

    __slots__ = ("_roles",)

    def __init__(self, roles: Iterable[str] = ()) -> None:
        cleaned = (role.strip() for role in roles)
        self._roles: tuple[str, ...] = tuple(dict.fromkeys(r for r in cleaned if r))

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __contains__(self, role: object) -> bool:
        return role in self._roles

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RoleSet):
            return frozenset(self._roles) == frozenset(other._roles)
        if isinstance(other, set | frozenset):
            return frozenset(self._roles) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._roles))

    def __repr__(self) -> str:
        return f"RoleSet({list(self._roles)!r})"

    def union(self, other: Iterable[str]) -> RoleSet:
        return RoleSet((*self._roles, *other))

    def difference(self, other: Iterable[str]) -> RoleSet:
        drop = set(other)
        return RoleSet(r for r in self._roles if r not in drop)

    def intersection(self, other: Iterable[str]) -> RoleSet:
        keep = set(other)
        return RoleSet(r for r in self._roles if r in keep)

    def to_list(self) -> list[str]:
        return list(self._roles)
