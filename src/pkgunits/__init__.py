"""Grouping of compiled Go package variants into logical units."""

from .classify import Classification, classify
from .dedup import deduplicate
from .models import Descriptor, Role, Unit, UnitInvariantError
from .units import aggregate_units, iter_units, select_packages, sort_units, visit_units

__version__ = "0.1.0"

__all__ = [
    "Classification",
    "Descriptor",
    "Role",
    "Unit",
    "UnitInvariantError",
    "aggregate_units",
    "classify",
    "deduplicate",
    "iter_units",
    "select_packages",
    "sort_units",
    "visit_units",
]
