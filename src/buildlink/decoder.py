"""Link fragment -> resolved selection, tolerant of old, damaged or hostile links.

Decoding runs as a fixed pipeline. The first stages (length guard, version
prefix, decompression, structure) are terminal: each raises its own
``ShareDecodeError`` subclass and ``ShareDecoder.decode`` turns that into a
``DecodeFailure``. Field resolution afterwards never fails; anything that
cannot be restored is counted and described on the result instead.

The numeric prefix only has to be well formed. The version stored inside the
record picks the field decoder, so a link whose record is newer than this
build reports that version as unsupported.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from . import wire
from .config import CodecConfig
from .exceptions import (
    FailureKind, InvalidVersionError, MalformedStructureError,
    MissingSeparatorError, PayloadTooLongError, ShareDecodeError,
    UnsupportedVersionError,
)
from .registry import Field
from .selection import ResolvedSelection
from .types import (
    CpuType, DnsProvider, GpuType, MonitorSoftware, OptimizationKey,
    PackageKey, Peripheral,
)

# Markers a link may carry in front of the fragment, stripped in this order.
LEGACY_PREFIXES = ("#", "?", "b=")


@dataclass(frozen=True)
class DecodeSuccess:
    selection: ResolvedSelection
    ok: bool = True


@dataclass(frozen=True)
class DecodeFailure:
    kind: FailureKind
    message: str
    ok: bool = False


DecodeResult = Union[DecodeSuccess, DecodeFailure]


@dataclass
class _Resolution:
    """Accumulates skips and warnings while fields are resolved."""

    skipped: int = 0
    warnings: List[str] = field(default_factory=list)

    def skip(self, count=1, warning=None):
        self.skipped += count
        if warning:
            self.warnings.append(warning)


def _preview(text, limit=64):
    return text if len(text) <= limit else text[:limit] + "..."


def normalize(text: str) -> str:
    """Strip leading fragment/query markers and the ``b=`` carrier name."""
    text = text.strip()
    for prefix in LEGACY_PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix):]
    return text


class ShareDecoder:
    """Decodes ``{version}.{payload}`` fragments produced by ``ShareEncoder``."""

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()
        self._decoders = {1: self._decode_v1}

    def decode(self, text: str) -> DecodeResult:
        try:
            selection = self._run(text if isinstance(text, str) else "")
        except ShareDecodeError as e:
            logging.warning("Rejected share link %r: %s", _preview(str(text)), e.message)
            return DecodeFailure(kind=e.kind, message=e.message)
        if selection.skipped_count:
            logging.info("Decoded share link with %s skipped setting(s)", selection.skipped_count)
        return DecodeSuccess(selection=selection)

    def _run(self, text: str) -> ResolvedSelection:
        cleaned = normalize(text)
        head, sep, payload = cleaned.partition(".")
        # must run before anything touches the payload
        if len(payload if sep else cleaned) > self.config.max_payload_length:
            raise PayloadTooLongError()
        if not sep:
            raise MissingSeparatorError()
        self._check_version(head)
        record = wire.parse_record(wire.unpack(payload, self.config.max_decompressed_bytes))
        version = record[wire.VERSION_KEY]
        decode_version = self._decoders.get(version)
        if decode_version is None:
            raise UnsupportedVersionError(version)
        return decode_version(record)

    @staticmethod
    def _check_version(head):
        if not (head.isascii() and head.isdigit()) or len(head) > 9 or int(head) < 1:
            raise InvalidVersionError()

    def _decode_v1(self, record) -> ResolvedSelection:
        res = _Resolution()
        cpu = self._scalar(record, wire.CPU_KEY, Field.CPU, CpuType.parse, "Unknown CPU setting", res)
        gpu = self._scalar(record, wire.GPU_KEY, Field.GPU, GpuType.parse, "Unknown GPU setting", res)
        dns = self._scalar(record, wire.DNS_KEY, Field.DNS, DnsProvider.parse, "Unknown DNS provider", res)

        peripherals = self._id_list(record, wire.PERIPHERALS_KEY, Field.PERIPHERAL,
                                    Peripheral.parse, "peripheral(s)", res)
        monitors = self._id_list(record, wire.MONITORS_KEY, Field.MONITOR,
                                 MonitorSoftware.parse, "monitor software", res)
        optimizations = self._id_list(record, wire.OPTIMIZATIONS_KEY, Field.OPTIMIZATION,
                                      OptimizationKey.parse, "optimization(s)", res)
        # links can be written by hand, so the safety filter runs again here
        optimizations, blocked = self.config.tiers.filter_shareable(optimizations)
        if blocked:
            res.skip(blocked, f"{blocked} optimization(s) blocked for safety")

        packages = []
        raw_packages = self._bounded_list(record, wire.PACKAGES_KEY, "package", res)
        malformed = 0
        for raw in raw_packages:
            key = PackageKey.parse(raw)
            if key:
                packages.append(key)
            else:
                malformed += 1
        if malformed:
            res.skip(malformed, f"{malformed} package(s) malformed")

        persona = self._scalar(record, wire.PERSONA_KEY, Field.PERSONA,
                               self.config.personas.parse, "Unknown preset", res)

        return ResolvedSelection(
            cpu=cpu,
            gpu=gpu,
            dns_provider=dns,
            peripherals=tuple(peripherals),
            monitor_software=tuple(monitors),
            optimizations=tuple(optimizations),
            packages=tuple(packages),
            persona=persona,
            skipped_count=res.skipped,
            warnings=tuple(res.warnings),
        )

    def _scalar(self, record, key, field, parse, label, res):
        if key not in record:
            return None
        id_ = record[key]
        value = parse(self.config.registry.to_value(field, id_))
        if not value:
            res.skip(warning=f"{label} (ID: {id_!r})")
            return None
        return value

    def _bounded_list(self, record, key, label, res):
        raw = record.get(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            res.skip(warning=f"Malformed {label} list ignored")
            return []
        limit = self.config.max_array_length
        if len(raw) > limit:
            res.skip(len(raw) - limit, f"{label} list truncated to {limit} entries")
            raw = raw[:limit]
        return raw

    def _id_list(self, record, key, field, parse, label, res):
        values = []
        unknown = 0
        for id_ in self._bounded_list(record, key, field.value, res):
            value = parse(self.config.registry.to_value(field, id_))
            if value:
                values.append(value)
            else:
                unknown += 1
        if unknown:
            res.skip(unknown, f"{unknown} {label} no longer available")
        return values
