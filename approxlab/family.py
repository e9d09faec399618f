"""
Function families: reference implementations and approximation variants.

A family groups everything needed to evaluate approximations of one
mathematical function: the trusted reference implementations, the ordered
approximation variants, and the default sampling range.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from approxlab.errors import ConfigurationError


ScalarFunction = Callable[[float], float]


@dataclass(frozen=True)
class ReferenceImplementation:
    """A trusted baseline function, identified by name."""
    name: str
    fn: ScalarFunction

    def __call__(self, x: float) -> float:
        return self.fn(x)


@dataclass(frozen=True)
class ApproximationVariant:
    """A pure float -> float approximation carrying a display name."""
    name: str
    fn: ScalarFunction

    def __call__(self, x: float) -> float:
        return self.fn(x)


@dataclass(frozen=True)
class FunctionFamily:
    """
    Reference implementations, variants and default range for one function.

    Families are immutable values. ``register_reference`` returns a new family
    instead of changing this one, so a family handed to an evaluator can never
    change underneath it.

    Attributes:
        name: Family name (e.g. "Sin Approximations")
        default_start: Default start of the sampling range
        default_end: Default end of the sampling range
        references: Read-only mapping of reference name -> implementation
        variant_list: Variants in registration order

    Examples:
        >>> family = build_family("Sin", (-math.pi, math.pi),
        ...                       [ReferenceImplementation("sin", math.sin)],
        ...                       [ApproximationVariant("taylor", taylor_sin)])
        >>> start, end = family.default_range()
        >>> [v.name for v in family.variants()]
        ['taylor']
    """
    name: str
    default_start: float
    default_end: float
    references: Mapping[str, ReferenceImplementation] = field(default_factory=dict)
    variant_list: Tuple[ApproximationVariant, ...] = ()

    def __post_init__(self):
        seen = set()
        for variant in self.variant_list:
            if variant.name in seen:
                raise ConfigurationError(f"Duplicate variant name in {self.name}: {variant.name}")
            seen.add(variant.name)

        # Copy so later changes to the caller's containers cannot reach the family
        object.__setattr__(self, 'references', MappingProxyType(dict(self.references)))
        object.__setattr__(self, 'variant_list', tuple(self.variant_list))

    def register_reference(self, fn: ScalarFunction, name: str) -> 'FunctionFamily':
        """
        Add or overwrite a reference implementation by name.

        Args:
            fn: Reference function
            name: Reference name

        Returns:
            New family containing the reference
        """
        references = dict(self.references)
        references[name] = ReferenceImplementation(name, fn)
        return replace(self, references=references)

    def variants(self) -> Iterator[ApproximationVariant]:
        """Yield variants in registration order."""
        return iter(self.variant_list)

    def default_range(self) -> Tuple[float, float]:
        """Return the default (start, end) sampling range."""
        return self.default_start, self.default_end

    def reference_names(self) -> List[str]:
        return list(self.references.keys())

    def variant_names(self) -> List[str]:
        return [variant.name for variant in self.variant_list]

    def reference(self, name: str) -> ReferenceImplementation:
        """
        Look up a reference implementation.

        Raises:
            ConfigurationError: If no reference has that name
        """
        try:
            return self.references[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown reference '{name}' for {self.name}. "
                f"Available: {', '.join(self.reference_names()) or 'none'}"
            ) from None

    def variant(self, name: str) -> ApproximationVariant:
        """
        Look up an approximation variant.

        Raises:
            ConfigurationError: If no variant has that name
        """
        for variant in self.variant_list:
            if variant.name == name:
                return variant
        raise ConfigurationError(
            f"Unknown variant '{name}' for {self.name}. "
            f"Available: {', '.join(self.variant_names()) or 'none'}"
        )

    def select_variants(self, names: Optional[Iterable[str]] = None) -> List[ApproximationVariant]:
        """
        Select variants by name, in the requested order.

        Args:
            names: Variant names, or None/empty for every variant

        Returns:
            List of selected variants
        """
        names = list(names) if names else []
        if not names:
            return list(self.variant_list)
        return [self.variant(name) for name in names]


def build_family(
    name: str,
    default_range: Tuple[float, float],
    references: Iterable[ReferenceImplementation],
    variants: Iterable[ApproximationVariant]
) -> FunctionFamily:
    """
    Build a fully-formed, read-only function family.

    Reference names that repeat overwrite earlier ones, the same way
    ``FunctionFamily.register_reference`` does. Variant names must be unique.

    Args:
        name: Family name
        default_range: Default (start, end) sampling range
        references: Reference implementations
        variants: Approximation variants, in display order

    Returns:
        FunctionFamily

    Raises:
        ConfigurationError: If two variants share a name
    """
    reference_map: Dict[str, ReferenceImplementation] = {}
    for reference in references:
        reference_map[reference.name] = reference

    start, end = default_range
    return FunctionFamily(
        name=name,
        default_start=float(start),
        default_end=float(end),
        references=reference_map,
        variant_list=tuple(variants)
    )
