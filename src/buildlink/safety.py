"""Risk tiers for optimizations and the filter that keeps ludicrous ones out of links."""

import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from .types import OptimizationKey as Opt, Tier


class TierMap:
    """Optimization key -> risk tier. Unclassified keys are never shareable."""

    def __init__(self, tiers: Mapping[str, Tier]):
        clean = {}
        for key, tier in tiers.items():
            parsed = Tier.parse(tier)
            if not parsed:
                raise ValueError(f"Unknown tier {tier!r} for optimization {key!r}")
            clean[getattr(key, "value", key)] = parsed
        self._tiers = MappingProxyType(clean)

    @classmethod
    def from_groups(cls, groups: Mapping[Tier, Iterable[str]]) -> "TierMap":
        tiers = {}
        for tier, keys in groups.items():
            for key in keys:
                key = getattr(key, "value", key)
                if key in tiers:
                    raise ValueError(f"Optimization {key!r} listed in more than one tier")
                tiers[key] = tier
        return cls(tiers)

    def tier(self, key) -> Optional[Tier]:
        return self._tiers.get(getattr(key, "value", key))

    def is_shareable(self, key) -> bool:
        tier = self.tier(key)
        return tier is not None and tier is not Tier.LUDICROUS

    def filter_shareable(self, keys: Iterable) -> Tuple[List, int]:
        """Split ``keys`` into the shareable ones (order kept) and a blocked count."""
        kept = []
        blocked = 0
        for key in keys:
            if self.is_shareable(key):
                kept.append(key)
            else:
                blocked += 1
        if blocked:
            logging.info("Safety filter blocked %s optimization(s)", blocked)
        return kept, blocked


DEFAULT_TIERS = TierMap.from_groups({
    Tier.SAFE: [
        Opt.PAGEFILE, Opt.FASTBOOT, Opt.TIMER, Opt.POWER_PLAN, Opt.USB_POWER,
        Opt.PCIE_POWER, Opt.DNS, Opt.NAGLE, Opt.AUDIO_ENHANCEMENTS, Opt.GAMEDVR,
        Opt.BACKGROUND_APPS, Opt.EDGE_DEBLOAT, Opt.COPILOT_DISABLE,
        Opt.EXPLORER_SPEED, Opt.TEMP_PURGE, Opt.RAZER_BLOCK, Opt.RESTORE_POINT,
        Opt.CLASSIC_MENU, Opt.STORAGE_SENSE, Opt.DISPLAY_PERF, Opt.END_TASK,
        Opt.EXPLORER_CLEANUP, Opt.NOTIFICATIONS_OFF, Opt.PS7_TELEMETRY,
        Opt.MULTIPLANE_OVERLAY, Opt.MOUSE_ACCEL, Opt.USB_SUSPEND,
        Opt.KEYBOARD_RESPONSE, Opt.GAME_MODE, Opt.MIN_PROCESSOR_STATE,
        Opt.HIBERNATION_DISABLE, Opt.RSS_ENABLE, Opt.ADAPTER_POWER,
        Opt.DELIVERY_OPT, Opt.WER_DISABLE, Opt.WIFI_SENSE, Opt.SPOTLIGHT_DISABLE,
        Opt.FEEDBACK_DISABLE, Opt.CLIPBOARD_SYNC, Opt.ACCESSIBILITY_SHORTCUTS,
        Opt.AUDIO_COMMUNICATIONS, Opt.AUDIO_SYSTEM_SOUNDS, Opt.INPUT_BUFFER,
        Opt.FILESYSTEM_PERF, Opt.DWM_PERF, Opt.BACKGROUND_POLLING,
        Opt.NIC_INTERRUPT_MOD, Opt.NIC_FLOW_CONTROL, Opt.NIC_ENERGY_EFFICIENT,
        Opt.BROWSER_BACKGROUND,
    ],
    Tier.CAUTION: [
        Opt.MSI_MODE, Opt.HPET, Opt.GAME_BAR, Opt.HAGS, Opt.FSO_DISABLE,
        Opt.ULTIMATE_PERF, Opt.SERVICES_TRIM, Opt.DISK_CLEANUP, Opt.WPBT_DISABLE,
        Opt.QOS_GAMING, Opt.NETWORK_THROTTLING, Opt.INTERRUPT_AFFINITY,
        Opt.PROCESS_MITIGATION, Opt.MMCSS_GAMING, Opt.SCHEDULER_OPT,
        Opt.CORE_PARKING, Opt.TIMER_REGISTRY, Opt.RSC_DISABLE,
        Opt.SYSMAIN_DISABLE, Opt.SERVICES_SEARCH_OFF, Opt.SCHEDULED_TASKS_GAMING,
        Opt.MEMORY_GAMING, Opt.POWER_THROTTLE_OFF, Opt.PRIORITY_BOOST_OFF,
        Opt.AMD_ULPS_DISABLE,
    ],
    Tier.RISKY: [
        Opt.NVIDIA_P0_STATE, Opt.PRIVACY_TIER1, Opt.PRIVACY_TIER2,
        Opt.PRIVACY_TIER3, Opt.BLOATWARE, Opt.IPV4_PREFER, Opt.TEREDO_DISABLE,
        Opt.NATIVE_NVME, Opt.SMT_DISABLE, Opt.AUDIO_EXCLUSIVE, Opt.TCP_OPTIMIZER,
        Opt.NETWORK_BINDING_STRIP,
    ],
    Tier.LUDICROUS: [
        Opt.SPECTRE_MELTDOWN_OFF, Opt.CORE_ISOLATION_OFF,
        Opt.KERNEL_MITIGATIONS_OFF, Opt.DEP_OFF,
    ],
})
