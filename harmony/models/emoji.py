from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional

import attr

if TYPE_CHECKING:
    from ..client import Client

__all__ = ("Emoji",)


@attr.define(init=False, eq=False)
class Emoji:
    """A custom guild emoji"""

    client: Client = attr.field(repr=False)
    id: Optional[str] = attr.field()
    name: Optional[str] = attr.field()
    roles: List[str] = attr.field()
    """ IDs of the roles allowed to use the emoji """
    require_colons: bool = attr.field()
    managed: bool = attr.field()
    animated: bool = attr.field()
    available: bool = attr.field()

    def __init__(self, client: Client, data: Mapping[str, Any]):
        self.client = client
        self.id = data.get("id")
        self.name = data.get("name")
        self.roles = list(data.get("roles", []))
        self.require_colons = data.get("require_colons", True)
        self.managed = data.get("managed", False)
        self.animated = data.get("animated", False)
        self.available = data.get("available", True)

    def __str__(self) -> str:
        if self.id is None:
            return self.name or ""
        prefix = "a" if self.animated else ""
        return f"<{prefix}:{self.name}:{self.id}>"
