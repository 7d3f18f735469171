import pytest

from buildlink.personas import PersonaCatalog
from buildlink.types import (
    CpuType, InvalidValue, OptimizationKey, PackageKey, Peripheral, Tier,
)


def test_parse_known_value():
    assert CpuType.parse("amd_x3d") is CpuType.AMD_X3D
    assert Peripheral.parse(Peripheral.RAZER) is Peripheral.RAZER


@pytest.mark.parametrize("raw", ["", "AMD_X3D", "ryzen", None, 1, ["intel"], True])
def test_parse_rejects_without_raising(raw):
    result = CpuType.parse(raw)
    assert isinstance(result, InvalidValue)
    assert not result
    assert result.kind == "CpuType"


def test_optimization_key_parse():
    assert OptimizationKey.parse("spectre_meltdown_off") is OptimizationKey.SPECTRE_MELTDOWN_OFF
    assert not OptimizationKey.parse("turbo_mode")


def test_tier_parse():
    assert Tier.parse("ludicrous") is Tier.LUDICROUS
    assert not Tier.parse("extreme")


@pytest.mark.parametrize("raw", ["Steam.Steam", "Café.App", "Test.Package™"])
def test_package_key_accepts_catalog_style_keys(raw):
    key = PackageKey.parse(raw)
    assert key == raw
    assert isinstance(key, PackageKey)


@pytest.mark.parametrize("raw", ["", "has space", "tab\there", "x" * 201, 7, None, {"k": 1}])
def test_package_key_rejects_malformed(raw):
    assert isinstance(PackageKey.parse(raw), InvalidValue)


def test_bundled_personas_load():
    catalog = PersonaCatalog.bundled()
    assert set(catalog.ids()) == {"benchmarker", "pro_gamer", "streamer", "gamer"}
    assert catalog.get("pro_gamer").display_name == "Pro Gamer"
    assert catalog.parse("gamer") == "gamer"
    assert not catalog.parse("speedrunner")
    assert not catalog.parse(4)


def test_persona_document_is_validated():
    bad = '{"meta": {"version": "1", "source": "x", "philosophy": "y"}, "personas": [{"id": "gamer"}]}'
    with pytest.raises(ValueError):
        PersonaCatalog.from_json(bad)


def test_duplicate_persona_ids_rejected(personas):
    gamer = personas.get("gamer")
    with pytest.raises(ValueError, match="Duplicate persona id"):
        PersonaCatalog([gamer, gamer])
