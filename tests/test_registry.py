import pytest

from buildlink.exceptions import RegistryGrowthError
from buildlink.registry import DEFAULT_REGISTRY, Field, IdRegistry, IdTable, check_growth
from buildlink.types import CpuType, OptimizationKey


def test_lookup_both_directions():
    assert DEFAULT_REGISTRY.to_id(Field.CPU, CpuType.AMD_X3D) == 1
    assert DEFAULT_REGISTRY.to_id(Field.CPU, "intel") == 3
    assert DEFAULT_REGISTRY.to_value(Field.CPU, 3) == "intel"


def test_unknown_lookups_return_none():
    assert DEFAULT_REGISTRY.to_id(Field.GPU, "voodoo") is None
    assert DEFAULT_REGISTRY.to_value(Field.GPU, 999) is None
    assert DEFAULT_REGISTRY.to_value(Field.GPU, "1") is None
    assert DEFAULT_REGISTRY.to_value(Field.GPU, True) is None
    assert DEFAULT_REGISTRY.to_value(Field.GPU, None) is None


def test_every_optimization_has_an_id():
    ids = {DEFAULT_REGISTRY.to_id(Field.OPTIMIZATION, key) for key in OptimizationKey}
    assert None not in ids
    assert len(ids) == len(OptimizationKey)


def test_persona_ids_match_bundled_catalog(config):
    for persona_id in config.personas.ids():
        assert DEFAULT_REGISTRY.to_id(Field.PERSONA, persona_id) is not None


def test_table_rejects_duplicate_ids():
    with pytest.raises(ValueError, match="assigned to both"):
        IdTable({"a": 1, "b": 1})


@pytest.mark.parametrize("bad_id", [0, -1, True, "1"])
def test_table_rejects_non_positive_ids(bad_id):
    with pytest.raises(ValueError):
        IdTable({"a": bad_id})


def test_registry_needs_every_field():
    with pytest.raises(ValueError, match="missing tables"):
        IdRegistry({Field.CPU: IdTable.sequential(["intel"])})


def test_extend_appends_after_highest_id(small_registry):
    grown = small_registry.extend(Field.GPU, ["intel", "nvidia"])
    assert grown.to_id(Field.GPU, "nvidia") == 1
    assert grown.to_id(Field.GPU, "amd") == 2
    assert grown.to_id(Field.GPU, "intel") == 3
    # original snapshot untouched
    assert small_registry.to_id(Field.GPU, "intel") is None
    check_growth(small_registry, grown)


def test_extend_never_reuses_retired_ids():
    table = IdTable({"old": 1, "kept": 3})
    registry = IdRegistry({f: table for f in Field})
    grown = registry.extend(Field.CPU, ["new"])
    assert grown.to_id(Field.CPU, "new") == 4


def test_small_registry_is_a_prefix_of_production(small_registry):
    check_growth(small_registry, DEFAULT_REGISTRY)


def test_growth_check_catches_reassignment(small_registry):
    tables = {f: small_registry.table(f) for f in Field}
    tables[Field.CPU] = IdTable({"intel": 1, "amd": 2, "amd_x3d": 3})
    with pytest.raises(RegistryGrowthError, match="reassigned"):
        check_growth(small_registry, IdRegistry(tables))


def test_growth_check_catches_removal(small_registry):
    tables = {f: small_registry.table(f) for f in Field}
    tables[Field.DNS] = IdTable.sequential(["cloudflare", "google"])
    with pytest.raises(RegistryGrowthError, match="removed"):
        check_growth(small_registry, IdRegistry(tables))
