"""FastAPI BOM endpoints.

POST /v1/bom/resolve                  resolve a gearmotor selection to part numbers
GET  /v1/bom/shaft-styles             plug-in shaft styles for a size / keyed option
GET  /v1/bom/hollow-shaft-bushings    bore bushings for a size / hollow option

Resolution is read-only against the vendor catalog.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from gearbom.api.dependencies import get_bom_resolver
from gearbom.config.settings import Settings, get_settings
from gearbom.engine.bom import BomResolver
from gearbom.engine.bom_text import BomCopyContext, build_bom_copy_text
from gearbom.engine.errors import ResolutionError
from gearbom.models.catalog import (
    ComponentSlot,
    HollowShaftBushingOption,
    ResolveBomOptions,
    ShaftStyleOption,
)
from gearbom.models.common import (
    DEFAULT_MOUNTING_VARIANT,
    MountingStyle,
    MountingVariant,
    OutputShaftOption,
    PlugInShaftStyle,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/bom", tags=["bom"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class ResolveBomRequest(BaseModel):
    """A gearmotor selection plus its drive arrangement."""

    model_type: str = Field(..., description="e.g. 'SK 1SI63 - 56C - 63S/4'")
    motor_hp: float | None = None
    total_ratio: float | None = None
    mounting_variant: MountingVariant = DEFAULT_MOUNTING_VARIANT
    gearmotor_mounting_style: MountingStyle | None = None
    output_shaft_option: OutputShaftOption | None = None
    gear_unit_size: str | None = None
    plug_in_shaft_style: PlugInShaftStyle | None = None
    hollow_shaft_bushing_bore_in: float | None = Field(default=None, gt=0)
    applied_sf: float = Field(default=1.0, gt=0)
    catalog_sf: float = Field(default=1.0, gt=0)
    catalog_page: str | None = None

    model_config = {"protected_namespaces": ()}


class ResolveBomResponse(BaseModel):
    model_type: str
    complete: bool
    output_shaft_kit_required: bool
    output_shaft_option: str | None = None
    components: list[ComponentSlot]
    copy_text: str

    model_config = {"protected_namespaces": ()}


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/resolve", response_model=ResolveBomResponse)
async def resolve_bom(
    body: ResolveBomRequest,
    resolver: BomResolver = Depends(get_bom_resolver),
    settings: Settings = Depends(get_settings),
) -> ResolveBomResponse:
    """Resolve every required BOM slot and render the order copy text.

    Missing catalog records come back as found=false slots; only requests
    the resolver cannot model at all are rejected with 422.
    """
    options = ResolveBomOptions(
        total_ratio=body.total_ratio,
        mounting_variant=body.mounting_variant,
        gearmotor_mounting_style=body.gearmotor_mounting_style,
        output_shaft_option=body.output_shaft_option,
        gear_unit_size=body.gear_unit_size,
        plug_in_shaft_style=body.plug_in_shaft_style,
        hollow_shaft_bushing_bore_in=body.hollow_shaft_bushing_bore_in,
    )
    try:
        bom = await resolver.resolve(body.model_type, body.motor_hp, options)
    except ResolutionError as exc:
        logger.info("BOM resolve rejected for %r: %s", body.model_type, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    copy_text = build_bom_copy_text(
        bom,
        BomCopyContext(
            applied_sf=body.applied_sf,
            catalog_sf=body.catalog_sf,
            catalog_page=body.catalog_page,
            motor_hp=body.motor_hp,
            vendor=resolver.vendor,
            series=settings.COVERAGE_SERIES,
        ),
    )
    return ResolveBomResponse(
        model_type=bom.model_type,
        complete=bom.complete,
        output_shaft_kit_required=bom.output_shaft_kit_required,
        output_shaft_option=bom.output_shaft_option,
        components=bom.components,
        copy_text=copy_text,
    )


@router.get("/shaft-styles", response_model=list[ShaftStyleOption])
async def list_shaft_styles(
    gear_unit_size: str = Query(..., min_length=1),
    output_shaft_option: OutputShaftOption = Query(...),
    resolver: BomResolver = Depends(get_bom_resolver),
) -> list[ShaftStyleOption]:
    """Plug-in shaft styles; empty for hollow options."""
    return await resolver.available_shaft_styles(gear_unit_size, output_shaft_option.value)


@router.get("/hollow-shaft-bushings", response_model=list[HollowShaftBushingOption])
async def list_hollow_shaft_bushings(
    gear_unit_size: str = Query(..., min_length=1),
    output_shaft_option: OutputShaftOption = Query(OutputShaftOption.INCH_HOLLOW),
    resolver: BomResolver = Depends(get_bom_resolver),
) -> list[HollowShaftBushingOption]:
    """Bore-reducing bushings, smallest bore first; empty for keyed options."""
    return await resolver.available_hollow_shaft_bushings(
        gear_unit_size, output_shaft_option.value,
    )
