"""Post-decode check of package keys against the live software catalog."""

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Tuple


@dataclass(frozen=True)
class PackageValidation:
    valid: Tuple[str, ...]
    invalid_count: int


def validate_packages(packages: Iterable[str], catalog_keys: AbstractSet[str]) -> PackageValidation:
    """Keep the packages present in ``catalog_keys``, counting the rest."""
    valid = []
    invalid = 0
    for key in packages:
        if isinstance(key, str) and key in catalog_keys:
            valid.append(key)
        else:
            invalid += 1
    return PackageValidation(valid=tuple(valid), invalid_count=invalid)
