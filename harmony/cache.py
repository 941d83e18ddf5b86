from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, MutableMapping, Optional, Protocol, runtime_checkable

import attr

__all__ = ("CacheAdapter", "DefaultCacheAdapter")

_L = logging.getLogger(__name__)


@runtime_checkable
class CacheAdapter(Protocol):
    """Storage the managers write raw payloads into, grouped by a
    namespace such as `guilds` or `members:<guild id>`.
    """

    async def get(self, namespace: str, key: str) -> Optional[Any]:
        ...

    async def set(self, namespace: str, key: str, value: Any) -> None:
        ...

    async def delete(self, namespace: str, key: str) -> bool:
        ...

    async def keys(self, namespace: str) -> List[str]:
        ...

    async def values(self, namespace: str) -> List[Any]:
        ...

    async def flush(self, namespace: str) -> None:
        ...


@attr.define
class DefaultCacheAdapter:
    """In-memory cache adapter, all writes go through a single
    `asyncio.Lock` so concurrent tasks never interleave a mutation.
    """

    data: MutableMapping[str, Dict[str, Any]] = attr.field(factory=dict)
    """ Namespace -> key -> payload """

    lock: asyncio.Lock = attr.field(factory=asyncio.Lock, eq=False, repr=False)

    async def get(self, namespace: str, key: str) -> Optional[Any]:
        bucket = self.data.get(namespace)
        if bucket is None:
            return None
        return bucket.get(str(key))

    async def set(self, namespace: str, key: str, value: Any) -> None:
        async with self.lock:
            self.data.setdefault(namespace, {})[str(key)] = value
        _L.debug("cached %s:%s", namespace, key)

    async def delete(self, namespace: str, key: str) -> bool:
        async with self.lock:
            bucket = self.data.get(namespace)
            if bucket is None or str(key) not in bucket:
                return False
            del bucket[str(key)]
            return True

    async def keys(self, namespace: str) -> List[str]:
        return list(self.data.get(namespace, {}))

    async def values(self, namespace: str) -> List[Any]:
        return list(self.data.get(namespace, {}).values())

    async def flush(self, namespace: str) -> None:
        async with self.lock:
            self.data.pop(namespace, None)
