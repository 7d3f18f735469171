"""Stable value <-> integer ID tables used to shrink shared links.

IDs are append-only. Once an ID has been minted for a value it is never
reused for anything else, even if the value is later retired, so links
encoded against an older table keep resolving after the table grows.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .exceptions import RegistryGrowthError
from .types import (
    CpuType, DnsProvider, GpuType, MonitorSoftware, OptimizationKey, Peripheral,
)


class Field(str, Enum):
    """Enumerable fields of a shared build."""

    CPU = "cpu"
    GPU = "gpu"
    DNS = "dns"
    PERIPHERAL = "peripheral"
    MONITOR = "monitor"
    OPTIMIZATION = "optimization"
    PERSONA = "persona"


def _key(value):
    return value.value if isinstance(value, Enum) else str(value)


class IdTable:
    """Immutable bijection between string values and positive integers."""

    def __init__(self, ids: Mapping[str, int]):
        by_id: Dict[int, str] = {}
        for value, id_ in ids.items():
            if not isinstance(id_, int) or isinstance(id_, bool) or id_ < 1:
                raise ValueError(f"ID for {value!r} must be a positive integer, got {id_!r}")
            if id_ in by_id:
                raise ValueError(f"ID {id_} assigned to both {by_id[id_]!r} and {value!r}")
            by_id[id_] = _key(value)
        self._by_value = MappingProxyType({_key(k): v for k, v in ids.items()})
        self._by_id = MappingProxyType(by_id)

    @classmethod
    def sequential(cls, values: Iterable[str]) -> "IdTable":
        """Mint IDs 1..n in the order given."""
        return cls({_key(value): i for i, value in enumerate(values, start=1)})

    def to_id(self, value) -> Optional[int]:
        return self._by_value.get(_key(value))

    def to_value(self, id_) -> Optional[str]:
        if not isinstance(id_, int) or isinstance(id_, bool):
            return None
        return self._by_id.get(id_)

    def next_id(self) -> int:
        return max(self._by_id, default=0) + 1

    def items(self):
        return self._by_value.items()


class IdRegistry:
    """One ``IdTable`` per enumerable field."""

    def __init__(self, tables: Mapping[Field, IdTable]):
        missing = [f.value for f in Field if f not in tables]
        if missing:
            raise ValueError(f"Registry is missing tables for: {', '.join(missing)}")
        self._tables = MappingProxyType(dict(tables))

    def table(self, field: Field) -> IdTable:
        return self._tables[field]

    def to_id(self, field: Field, value) -> Optional[int]:
        return self._tables[field].to_id(value)

    def to_value(self, field: Field, id_) -> Optional[str]:
        return self._tables[field].to_value(id_)

    def extend(self, field: Field, values: Iterable[str]) -> "IdRegistry":
        """Return a new registry with ``values`` appended to ``field``'s table.

        New values get IDs above the current maximum. Values already present
        keep their existing ID.
        """
        table = self._tables[field]
        ids = dict(table.items())
        next_id = table.next_id()
        for value in values:
            if _key(value) in ids:
                continue
            ids[_key(value)] = next_id
            next_id += 1
        tables = dict(self._tables)
        tables[field] = IdTable(ids)
        return IdRegistry(tables)


def check_growth(older: IdRegistry, newer: IdRegistry) -> None:
    """Raise ``RegistryGrowthError`` unless ``newer`` only adds to ``older``."""
    for field in Field:
        newer_table = newer.table(field)
        for value, id_ in older.table(field).items():
            current = newer_table.to_value(id_)
            if current is None:
                raise RegistryGrowthError(f"{field.value} ID {id_} ({value!r}) was removed")
            if current != value:
                raise RegistryGrowthError(
                    f"{field.value} ID {id_} was reassigned from {value!r} to {current!r}")
    logging.debug("Registry growth check passed")


# Production tables. Append new members at the end; never reorder or remove.
DEFAULT_REGISTRY = IdRegistry({
    Field.CPU: IdTable.sequential([
        CpuType.AMD_X3D, CpuType.AMD, CpuType.INTEL,
    ]),
    Field.GPU: IdTable.sequential([
        GpuType.NVIDIA, GpuType.AMD, GpuType.INTEL,
    ]),
    Field.DNS: IdTable.sequential([
        DnsProvider.CLOUDFLARE, DnsProvider.GOOGLE, DnsProvider.QUAD9,
        DnsProvider.OPENDNS, DnsProvider.ADGUARD,
    ]),
    Field.PERIPHERAL: IdTable.sequential([
        Peripheral.LOGITECH, Peripheral.RAZER, Peripheral.CORSAIR,
        Peripheral.STEELSERIES, Peripheral.ASUS, Peripheral.WOOTING,
    ]),
    Field.MONITOR: IdTable.sequential([
        MonitorSoftware.DELL, MonitorSoftware.LG, MonitorSoftware.HP,
    ]),
    Field.OPTIMIZATION: IdTable.sequential(OptimizationKey),
    Field.PERSONA: IdTable.sequential([
        "benchmarker", "pro_gamer", "streamer", "gamer",
    ]),
})
