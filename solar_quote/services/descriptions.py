"""
Line-item sentences printed on the quotation. Renderers and customers read
these verbatim, so the wording here is fixed per product variant.
"""

import math

from solar_quote.constants import BATTERY_TYPE_LONG
from solar_quote.services.capacity_service import calculate_system_kw, format_kw_for_display
from solar_quote.utils import format_number, parse_leading_int, parse_number, round_half_up


def _phase_digit(inverter_phase) -> str:
    return "3" if inverter_phase == "three_phase" else "1"


def inverter_kva_text(project) -> str:
    return project.inverter_kva or format_number(project.inverter_kw) or "1"


def battery_dc_volt(project) -> float:
    return project.voltage * project.battery_count


def describe_on_grid(project, kw: float) -> str:
    inverter_kw = format_number(project.inverter_kw or kw)
    return (
        f"Supply and Installation of {format_kw_for_display(kw)} kw Solar Panel "
        f"{inverter_kw} KW Inverter {_phase_digit(project.inverter_phase)}-Phase ON-GRID Solar System"
    )


def describe_off_grid(project, kw: float) -> str:
    inverter_volt = project.inverter_volt or format_number(battery_dc_volt(project))
    inverter_make = project.inverter_make[0].upper() if project.inverter_make else "MPPT"
    return (
        f"Supply and Installation of {project.panel_watts}W X {project.panel_count} Nos Panel, "
        f"{inverter_kva_text(project)}KVA/{inverter_volt}V {inverter_make} Inverter, "
        f"{project.battery_ah}Ah Battery * {project.battery_count} nos, "
        f"{_phase_digit(project.inverter_phase)}-Phase Offgrid Solar System"
    )


def describe_hybrid(project, kw: float) -> str:
    inverter_volt = project.inverter_volt or format_number(battery_dc_volt(project))
    brand = (project.battery_brand or "Exide").upper()
    battery_type = BATTERY_TYPE_LONG.get(project.battery_type, BATTERY_TYPE_LONG["lead_acid"])
    return (
        f"Supply and Installation of {format_kw_for_display(kw)} KW PANEL, "
        f"{inverter_kva_text(project)}KVA/{inverter_volt}V {_phase_digit(project.inverter_phase)} Phase Hybrid Inverter, "
        f"{brand} {project.battery_ah}AH {battery_type}-{project.battery_count} Nos, Hybrid Solar System"
    )


def describe_water_heater(project) -> str:
    brand = project.brand or "Standard"
    model = "Pressurized" if project.water_heater_model == "pressurized" else "Non-Pressurized"
    heating_coil = project.heating_coil or "Heating Coil"
    suffix = " And Transport Including GST" if project.labour_and_transport else " Including GST"
    return (
        f"Supply and Installation of {brand} make solar water heater {project.litre} LPD "
        f"commercial {model} with corrosion resistant epoxy Coated Inner tank and powder "
        f"coated outer tank. {heating_coil}{suffix}"
    )


def drive_hp_text(project) -> str:
    return project.drive_hp or project.hp or "1"


def drive_hp_whole(project) -> int:
    """Drive rating without decimals: "7.5" -> 7."""
    return int(math.floor(parse_number(drive_hp_text(project), 1.0)))


def water_pump_extras(project, dc_cable: bool) -> list:
    extras = []
    if project.earth_selected:
        extras.append("Earth kit")
    if project.lightning_arrest:
        extras.append("Lighting Arrester")
    if dc_cable:
        extras.append("DC Cable")
    if project.electrical_accessories:
        extras.append("Electrical Accessories")
    if project.labour_and_transport:
        extras.append("Labour and Transport")
    return extras


def _pump_sentence(project, hp, kw, extras) -> str:
    brand = project.panel_brand[0].upper() if project.panel_brand else "UTL"
    lower = "3"
    higher = "4"
    if project.gp_structure:
        lower = project.gp_structure.lower_end_height or lower
        higher = project.gp_structure.higher_end_height or higher

    description = (
        f"Supply and Installation solar power System Includes:{hp} hp Drive "
        f"{kw} kw {project.panel_watts}Wp x {project.panel_count} Nos {brand} Panel, "
        f"{_phase_digit(project.inverter_phase)} phase, {kw} kw Structure "
        f"{lower} feet lower to {higher} feet higher"
    )
    if extras:
        description += ", " + ", ".join(extras)
    return description


def describe_water_pump(project) -> str:
    """Pricing line: drive HP as entered ("7.5"), kW as displayed elsewhere, DC Cable from its own flag."""
    kw = format_kw_for_display(calculate_system_kw(project.panel_watts, project.panel_count))
    return _pump_sentence(project, drive_hp_text(project), kw, water_pump_extras(project, project.dc_cable))


def describe_water_pump_bom(project) -> str:
    """BOM row: whole HP and whole kW; DC Cable follows a DC earthing selection."""
    kw = round_half_up(parse_leading_int(project.panel_watts, 0) * project.panel_count / 1000)
    dc_earth = "dc" in project.earth or "ac_dc" in project.earth
    return _pump_sentence(project, drive_hp_whole(project), kw, water_pump_extras(project, dc_earth))
