"""Removal of duplicate descriptors reported by the package loader."""

from collections.abc import Iterable

from .models import Descriptor

FILE_SEPARATOR = ";"


def descriptor_key(descriptor: Descriptor) -> tuple[str, str, str, str]:
    """Identity of a descriptor: ID, name, module path and source files."""
    return (
        descriptor.id,
        descriptor.name,
        descriptor.pkg_path,
        FILE_SEPARATOR.join(descriptor.go_files),
    )


def deduplicate(descriptors: Iterable[Descriptor]) -> list[Descriptor]:
    """
    Return the descriptors with exact duplicates removed.

    Two descriptors are duplicates when ID, name, module path and the
    sorted file list are all equal. Each descriptor's ``go_files`` is
    sorted in place as a side effect.

    Callers must not rely on the output order. The first occurrence of
    each descriptor is the one kept.
    """
    seen: dict[tuple[str, str, str, str], Descriptor] = {}
    for descriptor in descriptors:
        descriptor.go_files.sort()
        seen.setdefault(descriptor_key(descriptor), descriptor)
    return list(seen.values())
