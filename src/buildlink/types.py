"""Value types carried by a shared build link.

Every type has a ``parse`` constructor that turns untrusted input into a
valid value or an ``InvalidValue`` marker. Nothing here raises on hostile
input; callers decide whether an ``InvalidValue`` is fatal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class InvalidValue:
    """Marker returned by ``parse`` when raw input is not a valid value."""

    kind: str
    raw: Any

    def __bool__(self):
        return False


class _ParseableEnum(str, Enum):
    """String enum with a non-raising validating constructor."""

    @classmethod
    def parse(cls, raw):
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return InvalidValue(cls.__name__, raw)
        try:
            return cls(raw)
        except ValueError:
            return InvalidValue(cls.__name__, raw)

    def __str__(self):
        return self.value


class CpuType(_ParseableEnum):
    AMD_X3D = "amd_x3d"
    AMD = "amd"
    INTEL = "intel"


class GpuType(_ParseableEnum):
    NVIDIA = "nvidia"
    AMD = "amd"
    INTEL = "intel"


class DnsProvider(_ParseableEnum):
    CLOUDFLARE = "cloudflare"
    GOOGLE = "google"
    QUAD9 = "quad9"
    OPENDNS = "opendns"
    ADGUARD = "adguard"


class Peripheral(_ParseableEnum):
    LOGITECH = "logitech"
    RAZER = "razer"
    CORSAIR = "corsair"
    STEELSERIES = "steelseries"
    ASUS = "asus"
    WOOTING = "wooting"


class MonitorSoftware(_ParseableEnum):
    DELL = "dell"
    LG = "lg"
    HP = "hp"


class Tier(_ParseableEnum):
    """Risk classification of an optimization."""

    SAFE = "safe"
    CAUTION = "caution"
    RISKY = "risky"
    LUDICROUS = "ludicrous"


class OptimizationKey(_ParseableEnum):
    # safe
    PAGEFILE = "pagefile"
    FASTBOOT = "fastboot"
    TIMER = "timer"
    POWER_PLAN = "power_plan"
    USB_POWER = "usb_power"
    PCIE_POWER = "pcie_power"
    DNS = "dns"
    NAGLE = "nagle"
    AUDIO_ENHANCEMENTS = "audio_enhancements"
    GAMEDVR = "gamedvr"
    BACKGROUND_APPS = "background_apps"
    EDGE_DEBLOAT = "edge_debloat"
    COPILOT_DISABLE = "copilot_disable"
    EXPLORER_SPEED = "explorer_speed"
    TEMP_PURGE = "temp_purge"
    RAZER_BLOCK = "razer_block"
    RESTORE_POINT = "restore_point"
    CLASSIC_MENU = "classic_menu"
    STORAGE_SENSE = "storage_sense"
    DISPLAY_PERF = "display_perf"
    END_TASK = "end_task"
    EXPLORER_CLEANUP = "explorer_cleanup"
    NOTIFICATIONS_OFF = "notifications_off"
    PS7_TELEMETRY = "ps7_telemetry"
    MULTIPLANE_OVERLAY = "multiplane_overlay"
    MOUSE_ACCEL = "mouse_accel"
    USB_SUSPEND = "usb_suspend"
    KEYBOARD_RESPONSE = "keyboard_response"
    GAME_MODE = "game_mode"
    MIN_PROCESSOR_STATE = "min_processor_state"
    HIBERNATION_DISABLE = "hibernation_disable"
    RSS_ENABLE = "rss_enable"
    ADAPTER_POWER = "adapter_power"
    DELIVERY_OPT = "delivery_opt"
    WER_DISABLE = "wer_disable"
    WIFI_SENSE = "wifi_sense"
    SPOTLIGHT_DISABLE = "spotlight_disable"
    FEEDBACK_DISABLE = "feedback_disable"
    CLIPBOARD_SYNC = "clipboard_sync"
    ACCESSIBILITY_SHORTCUTS = "accessibility_shortcuts"
    AUDIO_COMMUNICATIONS = "audio_communications"
    AUDIO_SYSTEM_SOUNDS = "audio_system_sounds"
    INPUT_BUFFER = "input_buffer"
    FILESYSTEM_PERF = "filesystem_perf"
    DWM_PERF = "dwm_perf"
    BACKGROUND_POLLING = "background_polling"
    NIC_INTERRUPT_MOD = "nic_interrupt_mod"
    NIC_FLOW_CONTROL = "nic_flow_control"
    NIC_ENERGY_EFFICIENT = "nic_energy_efficient"
    BROWSER_BACKGROUND = "browser_background"
    # caution
    MSI_MODE = "msi_mode"
    HPET = "hpet"
    GAME_BAR = "game_bar"
    HAGS = "hags"
    FSO_DISABLE = "fso_disable"
    ULTIMATE_PERF = "ultimate_perf"
    SERVICES_TRIM = "services_trim"
    DISK_CLEANUP = "disk_cleanup"
    WPBT_DISABLE = "wpbt_disable"
    QOS_GAMING = "qos_gaming"
    NETWORK_THROTTLING = "network_throttling"
    INTERRUPT_AFFINITY = "interrupt_affinity"
    PROCESS_MITIGATION = "process_mitigation"
    MMCSS_GAMING = "mmcss_gaming"
    SCHEDULER_OPT = "scheduler_opt"
    CORE_PARKING = "core_parking"
    TIMER_REGISTRY = "timer_registry"
    RSC_DISABLE = "rsc_disable"
    SYSMAIN_DISABLE = "sysmain_disable"
    SERVICES_SEARCH_OFF = "services_search_off"
    SCHEDULED_TASKS_GAMING = "scheduled_tasks_gaming"
    MEMORY_GAMING = "memory_gaming"
    POWER_THROTTLE_OFF = "power_throttle_off"
    PRIORITY_BOOST_OFF = "priority_boost_off"
    AMD_ULPS_DISABLE = "amd_ulps_disable"
    # risky
    NVIDIA_P0_STATE = "nvidia_p0_state"
    PRIVACY_TIER1 = "privacy_tier1"
    PRIVACY_TIER2 = "privacy_tier2"
    PRIVACY_TIER3 = "privacy_tier3"
    BLOATWARE = "bloatware"
    IPV4_PREFER = "ipv4_prefer"
    TEREDO_DISABLE = "teredo_disable"
    NATIVE_NVME = "native_nvme"
    SMT_DISABLE = "smt_disable"
    AUDIO_EXCLUSIVE = "audio_exclusive"
    TCP_OPTIMIZER = "tcp_optimizer"
    NETWORK_BINDING_STRIP = "network_binding_strip"
    # ludicrous
    SPECTRE_MELTDOWN_OFF = "spectre_meltdown_off"
    CORE_ISOLATION_OFF = "core_isolation_off"
    KERNEL_MITIGATIONS_OFF = "kernel_mitigations_off"
    DEP_OFF = "dep_off"


class PackageKey(str):
    """Opaque software catalog key, e.g. ``Steam.Steam``."""

    MAX_LENGTH = 200

    @classmethod
    def parse(cls, raw):
        if not isinstance(raw, str) or not raw or len(raw) > cls.MAX_LENGTH:
            return InvalidValue("PackageKey", raw)
        if any(ch.isspace() or not ch.isprintable() for ch in raw):
            return InvalidValue("PackageKey", raw)
        return cls(raw)
