from __future__ import annotations

import asyncio
import zlib
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterator, List, Optional


@dataclass(frozen=True)
class AccountName:
    address: str
    name: str

    @classmethod
    def unresolved(cls, address: str) -> "AccountName":
        return cls(address=address, name=address)

    @property
    def resolved(self) -> bool:
        return self.address != self.name

    def __str__(self) -> str:
        if self.resolved:
            return f"{self.address}={self.name}"
        return ""


Resolver = Callable[[str], Awaitable[AccountName]]


class NameCache:
    """Address -> display name map, filled lazily and never evicted.

    Lookups of the same address share one resolution; the per-shard locks keep
    unrelated addresses from waiting on each other.
    """

    def __init__(self, shards: int = 16) -> None:
        self._entries: Dict[str, AccountName] = {}
        self._locks: List[asyncio.Lock] = [asyncio.Lock() for _ in range(max(1, shards))]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, address: object) -> bool:
        return address in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def get(self, address: str) -> Optional[AccountName]:
        return self._entries.get(address)

    def insert_if_absent(self, entry: AccountName) -> AccountName:
        return self._entries.setdefault(entry.address, entry)

    def _lock_for(self, address: str) -> asyncio.Lock:
        return self._locks[zlib.crc32(address.encode("utf-8")) % len(self._locks)]

    async def get_or_resolve(self, address: str, resolver: Resolver) -> AccountName:
        cached = self._entries.get(address)
        if cached is not None:
            return cached
        async with self._lock_for(address):
            cached = self._entries.get(address)
            if cached is not None:
                return cached
            entry = await resolver(address)
            return self.insert_if_absent(entry)


__all__ = ["AccountName", "NameCache", "Resolver"]
