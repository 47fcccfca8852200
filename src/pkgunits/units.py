"""Grouping of package descriptors into units and ordered traversal."""

from collections.abc import Callable, Iterable, Iterator

from .classify import classify
from .dedup import deduplicate
from .models import Descriptor, Unit


def aggregate_units(
    descriptors: Iterable[Descriptor],
    verbose: bool = False,
) -> dict[str, Unit]:
    """
    Fold classified descriptors into units, keyed by base module path.

    The mapping is built in a single pass and preserves the order in
    which keys were first seen.

    Raises:
        UnitInvariantError: if two descriptors claim the same role under
            one key. The pass is aborted; nothing is overwritten.
    """
    units: dict[str, Unit] = {}
    for descriptor in descriptors:
        classification = classify(descriptor)
        if classification is None:
            if verbose:
                print(f"[pkgunits] Skipping file-less package {descriptor.id!r}")
            continue

        unit = units.get(classification.key)
        if unit is None:
            unit = units[classification.key] = Unit()
        unit.assign(classification.role, descriptor)

    return units


def sort_units(units: Iterable[Unit]) -> list[Unit]:
    """Order units by representative module path (stable)."""
    return sorted(units, key=lambda u: u.non_nil().pkg_path)


def iter_units(
    descriptors: Iterable[Descriptor],
    verbose: bool = False,
) -> Iterator[Unit]:
    """
    Yield units of a possibly unsorted descriptor list in path order.

    Deduplication and aggregation complete before the first unit is
    yielded, so a consumer that stops early never sees a unit that is
    still being filled.
    """
    unique = deduplicate(descriptors)
    ordered = sort_units(aggregate_units(unique, verbose=verbose).values())
    if verbose:
        print(f"[pkgunits] {len(ordered)} unit(s) from {len(unique)} package(s)")
    yield from ordered


def visit_units(
    descriptors: Iterable[Descriptor],
    visit: Callable[[Unit], None],
    verbose: bool = False,
) -> None:
    """
    Traverse descriptors as a set of units.

    All related descriptors are passed to ``visit`` as a single unit.
    Each unit is visited exactly once, in sorted module-path order.
    """
    for unit in iter_units(descriptors, verbose=verbose):
        visit(unit)


def select_packages(descriptors: Iterable[Descriptor]) -> list[Descriptor]:
    """
    Pick the packages an analysis pass should run over.

    For every unit the external test package is taken when present, then
    the internal test variant in preference to the base package. Test
    binaries are never selected. The result is sorted by module path.
    """
    selected: list[Descriptor] = []

    def collect(unit: Unit) -> None:
        if unit.external_test is not None:
            selected.append(unit.external_test)
        if unit.test is not None:
            selected.append(unit.test)
        elif unit.base is not None:
            selected.append(unit.base)

    visit_units(descriptors, collect)
    selected.sort(key=lambda d: d.pkg_path)
    return selected
