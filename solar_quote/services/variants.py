"""Dispatch from a project's variant tag to its pricing and BOM builders."""

import logging
from typing import Callable, Dict, NamedTuple, Optional

from pydantic import TypeAdapter

from solar_quote.models import ProjectConfiguration, ProjectType
from solar_quote.services import bom_service, pricing_service

_logger = logging.getLogger(__name__)


class VariantStrategy(NamedTuple):
    pricing: Callable
    bom: Callable


VARIANT_REGISTRY: Dict[ProjectType, VariantStrategy] = {
    ProjectType.ON_GRID: VariantStrategy(pricing_service.calculate_solar_pricing, bom_service.generate_solar_bom),
    ProjectType.OFF_GRID: VariantStrategy(pricing_service.calculate_solar_pricing, bom_service.generate_solar_bom),
    ProjectType.HYBRID: VariantStrategy(pricing_service.calculate_solar_pricing, bom_service.generate_solar_bom),
    ProjectType.WATER_HEATER: VariantStrategy(
        pricing_service.calculate_water_heater_pricing, bom_service.generate_water_heater_bom
    ),
    ProjectType.WATER_PUMP: VariantStrategy(
        pricing_service.calculate_water_pump_pricing, bom_service.generate_water_pump_bom
    ),
}

_project_adapter = TypeAdapter(ProjectConfiguration)


class UnknownProjectType(ValueError):
    pass


def project_type_of(payload) -> Optional[ProjectType]:
    if isinstance(payload, dict):
        tag = payload.get("projectType", payload.get("project_type"))
    else:
        tag = getattr(payload, "project_type", None)
    try:
        return ProjectType(tag)
    except (ValueError, TypeError):
        return None


def parse_project_configuration(payload: dict):
    """
    Typed project configuration for a raw payload (camelCase or snake_case keys).
    Returns None for a tag outside the five variants; a known tag with bad field
    values raises pydantic's ValidationError.
    """
    if project_type_of(payload) is None:
        _logger.warning("Unrecognized project type %r", payload.get("projectType", payload.get("project_type")))
        return None
    data = dict(payload)
    if "project_type" in data and "projectType" not in data:
        data["projectType"] = data.pop("project_type")
    data["projectType"] = ProjectType(data["projectType"]).value
    return _project_adapter.validate_python(data)


def require_project_configuration(payload: dict):
    project = parse_project_configuration(payload)
    if project is None:
        raise UnknownProjectType(
            f"Unsupported projectType {payload.get('projectType', payload.get('project_type'))!r}; "
            f"expected one of {', '.join(t.value for t in ProjectType)}"
        )
    return project


def strategy_for(project) -> Optional[VariantStrategy]:
    project_type = project_type_of(project)
    if project_type is None:
        return None
    return VARIANT_REGISTRY.get(project_type)
