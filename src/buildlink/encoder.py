"""Selection -> versioned, compressed link fragment."""

import logging
from dataclasses import dataclass
from typing import Optional

from . import wire
from .config import CodecConfig
from .registry import Field
from .selection import Selection
from .types import PackageKey


@dataclass(frozen=True)
class EncodedShare:
    fragment: str
    blocked_count: int = 0
    unregistered_count: int = 0
    invalid_package_count: int = 0


class ShareEncoder:
    """Encodes selections into ``{version}.{payload}`` fragments.

    Stateless apart from its config, so one encoder can serve any number of
    callers.
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()

    def encode(self, selection: Selection) -> EncodedShare:
        cfg = self.config
        record = {wire.VERSION_KEY: cfg.schema_version}
        missing = 0

        for key, field, value in (
            (wire.CPU_KEY, Field.CPU, selection.cpu),
            (wire.GPU_KEY, Field.GPU, selection.gpu),
            (wire.DNS_KEY, Field.DNS, selection.dns_provider),
            (wire.PERSONA_KEY, Field.PERSONA, selection.persona),
        ):
            if value is None:
                continue
            ids, skipped = self._to_ids(field, [value])
            missing += skipped
            if ids:
                record[key] = ids[0]

        optimizations, blocked = cfg.tiers.filter_shareable(selection.optimizations)
        for key, field, values in (
            (wire.PERIPHERALS_KEY, Field.PERIPHERAL, selection.peripherals),
            (wire.MONITORS_KEY, Field.MONITOR, selection.monitor_software),
            (wire.OPTIMIZATIONS_KEY, Field.OPTIMIZATION, optimizations),
        ):
            ids, skipped = self._to_ids(field, values[:cfg.max_array_length])
            missing += skipped
            if ids:
                record[key] = ids

        # package keys stay raw strings, but only ones the decoder will accept
        packages = []
        invalid_packages = 0
        for raw in selection.packages[:cfg.max_array_length]:
            key = PackageKey.parse(raw)
            if key:
                packages.append(str(key))
            else:
                logging.warning("Malformed package key %r, leaving it out of the link", raw)
                invalid_packages += 1
        if packages:
            record[wire.PACKAGES_KEY] = packages

        payload = wire.pack(record)
        logging.debug("Encoded wire record %s into %s chars", record, len(payload))
        return EncodedShare(
            fragment=f"{cfg.schema_version}.{payload}",
            blocked_count=blocked,
            unregistered_count=missing,
            invalid_package_count=invalid_packages,
        )

    def _to_ids(self, field, values):
        ids = []
        missing = 0
        for value in values:
            id_ = self.config.registry.to_id(field, value)
            if id_ is None:
                logging.warning("No %s ID registered for %r, leaving it out of the link",
                                field.value, value)
                missing += 1
                continue
            ids.append(id_)
        return ids, missing
