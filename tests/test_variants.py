import pytest
from pydantic import ValidationError

from solar_quote.models import HybridProject, OnGridProject, ProjectType, WaterPumpProject
from solar_quote.services.variants import (
    VARIANT_REGISTRY,
    UnknownProjectType,
    parse_project_configuration,
    require_project_configuration,
    strategy_for,
)


def test_registry_covers_every_project_type():
    assert set(VARIANT_REGISTRY) == set(ProjectType)


def test_parse_camel_case_payload():
    project = parse_project_configuration({
        "projectType": "on_grid",
        "panelWatts": 540,
        "panelCount": 6,
        "inverterKW": 3,
        "dcrPanelCount": 6,
        "projectValue": "₹ 1,80,000",
        "earth": "ac_dc",
    })
    assert isinstance(project, OnGridProject)
    assert project.inverter_kw == 3
    assert project.project_value == 180000
    assert project.earth == ["ac_dc"]


def test_parse_snake_case_payload():
    project = parse_project_configuration({"project_type": "hybrid", "battery_ah": 150})
    assert isinstance(project, HybridProject)
    assert project.battery_ah == "150"


def test_parse_battery_and_pump_wire_names():
    project = parse_project_configuration({"projectType": "hybrid", "batteryAH": "200", "inverterKVA": 5})
    assert project.battery_ah == "200"
    assert project.inverter_kva == "5"
    pump = parse_project_configuration({"projectType": "water_pump", "driveHP": 5, "qty": 0})
    assert isinstance(pump, WaterPumpProject)
    assert pump.drive_hp == "5"
    assert pump.qty == 1


def test_null_fields_fall_back_to_defaults():
    project = parse_project_configuration({
        "projectType": "off_grid", "panelWatts": None, "panelCount": None, "gstPercentage": 0,
    })
    assert project.panel_watts == 530
    assert project.panel_count == 1
    assert project.gst_percentage == 18


def test_unknown_project_type_returns_none():
    assert parse_project_configuration({"projectType": "solar_street_light"}) is None
    assert parse_project_configuration({}) is None


def test_require_rejects_unknown_type():
    with pytest.raises(UnknownProjectType):
        require_project_configuration({"projectType": "wind"})


def test_bad_field_value_is_a_validation_error():
    with pytest.raises(ValidationError):
        parse_project_configuration({"projectType": "on_grid", "inverterPhase": "two_phase"})


def test_strategy_for_typed_project():
    assert strategy_for(OnGridProject()) is VARIANT_REGISTRY[ProjectType.ON_GRID]


@pytest.mark.parametrize("project_type", [t.value for t in ProjectType])
def test_every_tag_parses_to_its_variant(project_type):
    project = parse_project_configuration({"projectType": project_type, "gstPercentage": None, "floor": None})
    assert project.project_type == project_type
    assert project.gst_percentage == 18
    assert project.floor is None
    assert strategy_for(project) is VARIANT_REGISTRY[ProjectType(project_type)]


def test_keyword_none_uses_field_default():
    project = OnGridProject(panel_watts=None, earth=None, inverter_phase=None)
    assert project.panel_watts == 530
    assert project.earth == []
    assert project.inverter_phase == "single_phase"
