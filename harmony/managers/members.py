from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from ..models.member import Member
from .base import BaseManager

if TYPE_CHECKING:
    from ..client import Client
    from ..models.guild import Guild

__all__ = ("MembersManager",)


class MembersManager(BaseManager[Member]):
    """Members of a single guild, cached under `members:<guild id>`"""

    guild: Guild

    def __init__(self, client: Client, guild: Guild):
        super().__init__(client, f"members:{guild.id}", Member)
        self.guild = guild

    def build(self, data: Any) -> Member:
        return Member(self.client, self.guild, data)

    async def from_payload(self, members: Iterable[Mapping[str, Any]]) -> None:
        """Stores every member payload keyed by its user id"""

        for member in members:
            await self.set(member["user"]["id"], member)
