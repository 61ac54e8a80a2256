"""Shared types, enums, and base models used across gearbom domain models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UUIDv7 = Annotated[UUID, Field(description="Time-sortable UUID v7.")]
UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]


# --- Shared enums ---


class CatalogComponentType(StrEnum):
    """Record types stored in the vendor component catalog."""

    GEAR_UNIT = "GEAR_UNIT"
    INPUT_ADAPTER = "INPUT_ADAPTER"
    MOTOR = "MOTOR"
    OUTPUT_SHAFT_KIT = "OUTPUT_SHAFT_KIT"
    HOLLOW_SHAFT_BUSHING = "HOLLOW_SHAFT_BUSHING"


class BomComponentType(StrEnum):
    """BOM slot categories, in resolution order."""

    GEAR_UNIT = "gear_unit"
    MOTOR = "motor"
    ADAPTER = "adapter"
    OUTPUT_SHAFT_KIT = "output_shaft_kit"
    HOLLOW_SHAFT_BUSHING = "hollow_shaft_bushing"


class MountingStyle(StrEnum):
    """How the gear unit attaches to the driven shaft."""

    SHAFT_MOUNTED = "shaft_mounted"
    BOTTOM_MOUNT = "bottom_mount"


class MountingVariant(StrEnum):
    """Hollow-bore variant of the gear unit, part of the gear unit PN key."""

    INCH_HOLLOW = "inch_hollow"
    METRIC_HOLLOW = "metric_hollow"


class OutputShaftOption(StrEnum):
    """Output shaft kit options (bottom mount only)."""

    INCH_KEYED = "inch_keyed"
    METRIC_KEYED = "metric_keyed"
    INCH_HOLLOW = "inch_hollow"
    METRIC_HOLLOW = "metric_hollow"


class PlugInShaftStyle(StrEnum):
    """Plug-in shaft styles (keyed output shaft options only)."""

    SINGLE = "single"
    DOUBLE = "double"
    FLANGE_B5 = "flange_b5"


class CoverageStatus(StrEnum):
    """Outcome of one coverage case. Declaration order is report order."""

    RESOLVED = "resolved"
    AMBIGUOUS = "ambiguous"
    UNRESOLVED = "unresolved"
    INVALID = "invalid"


KEYED_SHAFT_OPTIONS: frozenset[str] = frozenset({
    OutputShaftOption.INCH_KEYED.value,
    OutputShaftOption.METRIC_KEYED.value,
})

DEFAULT_MOUNTING_VARIANT = MountingVariant.INCH_HOLLOW


# --- Base model ---


class GearBomBase(BaseModel):
    """Base model with common configuration for all gearbom Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
