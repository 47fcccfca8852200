"""Role classification of compiled package descriptors.

Loader output names test variants by convention only:

    example.com/foo                                  base package
    example.com/foo [example.com/foo.test]           foo compiled with its _test.go files
    example.com/foo_test [example.com/foo.test]      external (black-box) test package
    example.com/foo.test                             generated test binary (package main)

``classify`` maps each descriptor to the role it plays and the key of the
unit it belongs to. The rules are checked in order and the first match
wins; the order is part of the contract.
"""

from dataclasses import dataclass

from .models import Descriptor, Role

EXTERNAL_TEST_SUFFIX = "_test"
TEST_VARIANT_MARKER = ".test]"
TEST_BINARY_SUFFIX = ".test"
ENTRY_PACKAGE_NAME = "main"


@dataclass(frozen=True)
class Classification:
    """Where a descriptor goes: its role and the key of its unit."""

    role: Role
    key: str


def _without_suffix(s: str, suffix: str) -> str:
    if suffix and s.endswith(suffix):
        return s[: -len(suffix)]
    return s


def classify(descriptor: Descriptor) -> Classification | None:
    """
    Decide the role and unit key of a descriptor.

    Args:
        descriptor: Package descriptor from the loader

    Returns:
        The classification, or None for file-less packages (empty name)
        which belong to no unit.
    """
    if descriptor.pkg_path.endswith(EXTERNAL_TEST_SUFFIX):
        return Classification(
            Role.EXTERNAL_TEST,
            _without_suffix(descriptor.pkg_path, EXTERNAL_TEST_SUFFIX),
        )

    if TEST_VARIANT_MARKER in descriptor.id:
        return Classification(Role.TEST, descriptor.pkg_path)

    if descriptor.name == ENTRY_PACKAGE_NAME and descriptor.id.endswith(TEST_BINARY_SUFFIX):
        return Classification(
            Role.TEST_BINARY,
            _without_suffix(descriptor.pkg_path, TEST_BINARY_SUFFIX),
        )

    if descriptor.name == "":
        return None

    return Classification(Role.BASE, descriptor.pkg_path)
