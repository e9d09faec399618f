"""
Registry of function families, built once at startup.
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping

from approxlab.errors import ConfigurationError
from approxlab.family import FunctionFamily


class FamilyRegistry:
    """
    Read-only lookup of function families by name.

    Registries are built with ``build_registry`` and cannot be changed
    afterwards. Each call to ``default_registry`` returns a new instance, so
    nothing is shared between independent evaluations.
    """

    def __init__(self, families: Mapping[str, FunctionFamily]):
        self._families = MappingProxyType(dict(families))

    def get(self, name: str) -> FunctionFamily:
        """
        Get a family by name.

        Raises:
            ConfigurationError: If the family is not registered
        """
        try:
            return self._families[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown function family '{name}'. "
                f"Available: {', '.join(self.list_families()) or 'none'}"
            ) from None

    def list_families(self) -> List[str]:
        """List registered family names in registration order."""
        return list(self._families.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._families

    def __iter__(self):
        return iter(self._families.values())

    def __len__(self) -> int:
        return len(self._families)


def build_registry(families: Iterable[FunctionFamily]) -> FamilyRegistry:
    """
    Build a registry from families.

    Args:
        families: Families to register

    Returns:
        FamilyRegistry

    Raises:
        ConfigurationError: If two families share a name
    """
    by_name = {}
    for family in families:
        if family.name in by_name:
            raise ConfigurationError(f"Duplicate function family: {family.name}")
        by_name[family.name] = family
    return FamilyRegistry(by_name)


def default_registry() -> FamilyRegistry:
    """Build a registry holding the bundled function families."""
    from approxlab.functions import sine_family
    return build_registry([sine_family()])
