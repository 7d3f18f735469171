"""Selections going into a link and resolved selections coming out of one."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .exceptions import InvalidSelectionError
from .types import (
    CpuType, DnsProvider, GpuType, MonitorSoftware, OptimizationKey,
    PackageKey, Peripheral,
)


def _parse_list(name, raw, parse):
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise InvalidSelectionError(name, raw)
    values = []
    for item in raw:
        value = parse(item)
        if not value:
            raise InvalidSelectionError(name, item)
        values.append(value)
    return tuple(values)


def _parse_scalar(name, raw, parse):
    value = parse(raw)
    if not value:
        raise InvalidSelectionError(name, raw)
    return value


@dataclass(frozen=True)
class Selection:
    """A build the user wants to share."""

    cpu: Optional[CpuType] = None
    gpu: Optional[GpuType] = None
    dns_provider: Optional[DnsProvider] = None
    peripherals: Tuple[Peripheral, ...] = ()
    monitor_software: Tuple[MonitorSoftware, ...] = ()
    optimizations: Tuple[OptimizationKey, ...] = ()
    packages: Tuple[PackageKey, ...] = ()
    persona: Optional[str] = None

    @classmethod
    def from_dict(cls, data, personas=None):
        """Build a selection from JSON-style input, raising ``InvalidSelectionError``.

        Accepts both snake_case and the camelCase keys used by the web client.
        ``personas`` is a ``PersonaCatalog``; without one the persona id is
        only checked for being a non-empty string.
        """
        if not isinstance(data, dict):
            raise InvalidSelectionError("selection", data)

        def pick(*names):
            for name in names:
                if data.get(name) is not None:
                    return data[name]
            return None

        cpu = pick("cpu")
        gpu = pick("gpu")
        dns = pick("dns_provider", "dnsProvider")
        persona = pick("persona", "preset")
        if persona is not None:
            if personas is not None:
                persona = _parse_scalar("persona", persona, personas.parse)
            elif not isinstance(persona, str) or not persona:
                raise InvalidSelectionError("persona", persona)

        return cls(
            cpu=_parse_scalar("cpu", cpu, CpuType.parse) if cpu is not None else None,
            gpu=_parse_scalar("gpu", gpu, GpuType.parse) if gpu is not None else None,
            dns_provider=_parse_scalar("dns_provider", dns, DnsProvider.parse) if dns is not None else None,
            peripherals=_parse_list("peripherals", pick("peripherals"), Peripheral.parse),
            monitor_software=_parse_list(
                "monitor_software", pick("monitor_software", "monitorSoftware"), MonitorSoftware.parse),
            optimizations=_parse_list("optimizations", pick("optimizations"), OptimizationKey.parse),
            packages=_parse_list("packages", pick("packages"), PackageKey.parse),
            persona=persona,
        )

    def to_dict(self):
        return {
            "cpu": self.cpu.value if self.cpu else None,
            "gpu": self.gpu.value if self.gpu else None,
            "dns_provider": self.dns_provider.value if self.dns_provider else None,
            "peripherals": [p.value for p in self.peripherals],
            "monitor_software": [m.value for m in self.monitor_software],
            "optimizations": [o.value for o in self.optimizations],
            "packages": [str(p) for p in self.packages],
            "persona": self.persona,
        }


@dataclass(frozen=True)
class ResolvedSelection(Selection):
    """A selection rebuilt from a link, with what could not be restored."""

    skipped_count: int = 0
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self):
        data = super().to_dict()
        data["skipped_count"] = self.skipped_count
        data["warnings"] = list(self.warnings)
        return data

    def as_selection(self) -> Selection:
        return Selection(
            cpu=self.cpu,
            gpu=self.gpu,
            dns_provider=self.dns_provider,
            peripherals=self.peripherals,
            monitor_software=self.monitor_software,
            optimizations=self.optimizations,
            packages=self.packages,
            persona=self.persona,
        )
