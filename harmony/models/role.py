from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

import attr

from .permissions import Permissions

if TYPE_CHECKING:
    from ..client import Client

__all__ = ("Role",)


@attr.define(init=False, eq=False)
class Role:
    """A guild role"""

    client: Client = attr.field(repr=False)
    id: str = attr.field()
    name: str = attr.field()
    color: int = attr.field()
    hoist: bool = attr.field()
    position: int = attr.field()
    permissions: Permissions = attr.field()
    managed: bool = attr.field()
    mentionable: bool = attr.field()

    def __init__(self, client: Client, data: Mapping[str, Any]):
        self.client = client
        self.id = str(data["id"])
        self.name = data["name"]
        self.color = data.get("color", 0)
        self.hoist = data.get("hoist", False)
        self.position = data.get("position", 0)
        self.permissions = Permissions(data.get("permissions", 0))
        self.managed = data.get("managed", False)
        self.mentionable = data.get("mentionable", False)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Role) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)
