"""Data models for package-unit grouping."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class UnitInvariantError(RuntimeError):
    """A unit invariant was broken.

    Raised when two descriptors compete for the same role under one key,
    or when a unit with no populated slot is inspected. Neither can happen
    for well-formed loader output, so this is never caught by the library.
    """


class Role(str, Enum):
    """Role a compiled package plays inside its unit."""

    BASE = "base"
    TEST = "test"
    EXTERNAL_TEST = "external_test"
    TEST_BINARY = "test_binary"

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]


_ROLE_LABELS = {
    Role.BASE: "Base",
    Role.TEST: "Test",
    Role.EXTERNAL_TEST: "ExternalTest",
    Role.TEST_BINARY: "TestBinary",
}

# Slot probe order used for the representative package of a unit.
ROLE_PRIORITY = (Role.BASE, Role.TEST, Role.EXTERNAL_TEST, Role.TEST_BINARY)


@dataclass
class Descriptor:
    """One compiled package variant as reported by the package loader."""

    id: str
    name: str
    pkg_path: str
    go_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "pkg_path": self.pkg_path,
            "go_files": list(self.go_files),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Descriptor":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            pkg_path=data["pkg_path"],
            go_files=list(data.get("go_files", [])),
        )


@dataclass
class Unit:
    """A source package together with its test variants.

    Every slot holds at most one descriptor. Units produced by
    ``aggregate_units`` always have at least one slot populated.
    """

    base: Descriptor | None = None
    test: Descriptor | None = None
    external_test: Descriptor | None = None
    test_binary: Descriptor | None = None

    def get(self, role: Role) -> Descriptor | None:
        return getattr(self, role.value)

    def assign(self, role: Role, descriptor: Descriptor) -> None:
        """Fill the slot for ``role``; the slot must be empty."""
        current = self.get(role)
        if current is not None:
            raise UnitInvariantError(
                f"{role.label} slot already holds ID={current.id!r} Path={current.pkg_path!r}; "
                f"refusing ID={descriptor.id!r} Path={descriptor.pkg_path!r}"
            )
        setattr(self, role.value, descriptor)

    def roles(self) -> list[Role]:
        """Populated roles, in priority order."""
        return [role for role in ROLE_PRIORITY if self.get(role) is not None]

    def non_nil(self) -> Descriptor:
        """
        Return the first populated slot.

        Slots are probed Base, Test, ExternalTest, TestBinary. Their
        module paths are expected to agree, so the result is used as the
        unit's representative package.

        Raises:
            UnitInvariantError: if every slot is empty
        """
        for role in ROLE_PRIORITY:
            descriptor = self.get(role)
            if descriptor is not None:
                return descriptor
        raise UnitInvariantError("all Unit slots are empty")

    def describe(self) -> str:
        """Slot summary such as ``Base+Test+TestBinary``."""
        return "+".join(role.label for role in self.roles())

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"pkg_path": self.non_nil().pkg_path}
        for role in ROLE_PRIORITY:
            descriptor = self.get(role)
            data[role.value] = descriptor.to_dict() if descriptor is not None else None
        return data
