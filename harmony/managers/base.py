from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, List, Optional, TypeVar

import attr

if TYPE_CHECKING:
    from ..client import Client

__all__ = ("BaseManager",)

T = TypeVar("T")


@attr.define
class BaseManager(Generic[T]):
    """Keeps raw payloads of one kind in the client's cache under
    `cache_name` and builds models from them on access.
    """

    client: Client = attr.field(repr=False)
    cache_name: str = attr.field()
    """ Namespace in the cache adapter """
    data_type: Callable[..., T] = attr.field(repr=False)
    """ Called as `data_type(client, payload)` to build a model """

    def build(self, data: Any) -> T:
        return self.data_type(self.client, data)

    async def get_raw(self, key: str) -> Optional[Any]:
        return await self.client.cache.get(self.cache_name, str(key))

    async def get(self, key: str) -> Optional[T]:
        """Returns the cached model for `key`, `None` on a cache miss"""

        raw = await self.get_raw(key)
        if raw is None:
            return None
        return self.build(raw)

    async def set(self, key: str, value: Any) -> None:
        await self.client.cache.set(self.cache_name, str(key), value)

    async def delete_cached(self, key: str) -> bool:
        """Drops `key` from the cache, this does not touch the API"""
        return await self.client.cache.delete(self.cache_name, str(key))

    async def keys(self) -> List[str]:
        return await self.client.cache.keys(self.cache_name)

    async def values(self) -> List[T]:
        return [self.build(raw) for raw in await self.client.cache.values(self.cache_name)]

    async def size(self) -> int:
        return len(await self.keys())

    async def flush(self) -> None:
        await self.client.cache.flush(self.cache_name)
