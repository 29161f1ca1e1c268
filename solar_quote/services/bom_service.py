import logging

from solar_quote.constants import (
    AC_CABLE_METERS,
    BATTERY_BRAND_DISPLAY,
    BATTERY_TYPE_SHORT,
    CABLE_DOUBLING_THRESHOLD_KW,
    DC_CABLE_METERS,
    DEFAULT_BATTERY_VOLTAGE,
    DEFAULT_INVERTER_MAKE,
    DEFAULT_PANEL_MAKE,
    DEFAULT_PANEL_TYPE_DISPLAY,
    PANEL_TYPE_DISPLAY,
    STRUCTURE_MATERIAL,
)
from solar_quote.models import BillOfMaterialsItem, Quantity, SerialNumber
from solar_quote.services.capacity_service import calculate_system_kw, panel_mounting_rating
from solar_quote.services.descriptions import (
    battery_dc_volt,
    describe_water_heater,
    describe_water_pump_bom,
    drive_hp_whole,
)
from solar_quote.utils import format_number, parse_number, round_half_up, title_words

_logger = logging.getLogger(__name__)

MNRE_MAKE = "As per MNRE App"


def _item(sl_no, description, type_, volt, rating, make, qty, unit, rate=None, amount=None):
    if not isinstance(sl_no, SerialNumber):
        sl_no = SerialNumber.model_validate(sl_no)
    if not isinstance(qty, Quantity):
        qty = Quantity.fixed(qty)
    return BillOfMaterialsItem(
        sl_no=sl_no,
        description=description,
        type=type_,
        volt=str(volt),
        rating=str(rating),
        make=make,
        qty=qty,
        unit=unit,
        rate=rate,
        amount=amount,
    )


def battery_brand_display(brand) -> str:
    if not brand:
        return "Exide"
    return BATTERY_BRAND_DISPLAY.get(brand.lower()) or title_words(brand)


def structure_material(structure_type) -> str:
    return STRUCTURE_MATERIAL.get(structure_type or "gp_structure", "GI")


def _phase_volt(project) -> str:
    return "415" if project.inverter_phase == "three_phase" else "230"


def _panel_rows(project, sl_no, alerts):
    """Solar Panel (DCR) / (NON-DCR) rows. Returns (rows, next serial)."""
    panel_type = PANEL_TYPE_DISPLAY.get(project.panel_type, DEFAULT_PANEL_TYPE_DISPLAY)
    make = " / ".join(project.solar_panel_make) if project.solar_panel_make else DEFAULT_PANEL_MAKE
    rating = f"{project.panel_watts} WATTS"

    dcr = project.dcr_panel_count or 0
    non_dcr = project.non_dcr_panel_count or 0

    def panel(serial, label, count):
        return _item(serial, f"Solar Panel ({label})", panel_type, "24", rating, make, count, "Nos")

    if dcr > 0 and non_dcr > 0:
        rows = [
            panel(SerialNumber(major=sl_no, minor="a"), "DCR", dcr),
            panel(SerialNumber(major=sl_no, minor="b"), "NON-DCR", non_dcr),
        ]
        return rows, sl_no + 1
    if dcr > 0:
        return [panel(sl_no, "DCR", dcr)], sl_no + 1
    if non_dcr > 0:
        return [panel(sl_no, "NON-DCR", non_dcr)], sl_no + 1

    _logger.warning("No DCR or NON-DCR panels on a %s project; BOM has no panel row", project.project_type)
    alerts.append({
        "code": "BOM-NO-PANELS",
        "message": "Both DCR and NON-DCR panel counts are zero; the bill of materials has no solar panel row.",
    })
    return [], sl_no


def _battery_row(project, sl_no):
    brand = battery_brand_display(project.battery_brand)
    return _item(
        sl_no,
        f"{brand} Battery",
        BATTERY_TYPE_SHORT.get(project.battery_type, "Battery"),
        format_number(project.voltage or DEFAULT_BATTERY_VOLTAGE),
        f"{project.battery_ah} AH",
        brand,
        project.battery_count or 1,
        "Nos",
    )


def _inverter_details(project, panel_kw):
    """(description, volt, rating text, capacity) of the inverter row for a solar variant."""
    if project.project_type == "on_grid":
        capacity = project.inverter_kw or panel_kw
        return "Solar Ongrid Inverter", _phase_volt(project), format_number(capacity), capacity

    if project.inverter_kva:
        rating = project.inverter_kva
    else:
        rating = format_number(project.inverter_kw or panel_kw)
    capacity = parse_number(rating, 0.0)

    if project.project_type == "off_grid":
        dc_volt = battery_dc_volt(project)
        volt = project.inverter_volt or (format_number(dc_volt) if dc_volt else "230")
        return "Solar Offgrid Inverter", volt, rating, capacity
    return "Solar Hybrid Inverter", project.inverter_volt or _phase_volt(project), rating, capacity


def generate_solar_bom(project, alerts, start_sl_no=1):
    """
    Ordered BOM shared by on-grid, off-grid and hybrid systems:
    panels, inverter (+ battery), structure, ACDB, DCDB, cables, earthing and services.
    """
    panel_kw = calculate_system_kw(project.panel_watts, project.panel_count)
    description, volt, rating, capacity = _inverter_details(project, panel_kw)
    inverter_make = " / ".join(project.inverter_make) if project.inverter_make else DEFAULT_INVERTER_MAKE
    inverter_qty = project.inverter_qty or 1
    material = structure_material(project.structure_type)

    BOM, sl_no = _panel_rows(project, start_sl_no, alerts)

    BOM.append(_item(sl_no, description, "MPPT", volt, rating, inverter_make, inverter_qty, "Nos"))
    sl_no += 1

    if project.project_type in ("off_grid", "hybrid"):
        BOM.append(_battery_row(project, sl_no))
        sl_no += 1

    BOM.append(_item(
        sl_no, "Panel Mounting Structure", material, "NA",
        panel_mounting_rating(panel_kw), "Reputed", inverter_qty, "Set",
    ))
    sl_no += 1

    BOM.append(_item(sl_no, "ACDB with MCB", "AC", volt, rating, "Reputed", inverter_qty, "Set"))
    sl_no += 1
    BOM.append(_item(sl_no, "DCDB with MCB", "DC", "600", rating, "Reputed", 1, "Set"))
    sl_no += 1

    # Cable runs double on larger inverters
    factor = 2 if capacity > CABLE_DOUBLING_THRESHOLD_KW else 1
    BOM.append(_item(sl_no, "DC CABLE", "DC", "NA", "4 SQ.MM", "Mardia/Polycab", DC_CABLE_METERS * factor, "Mtr"))
    sl_no += 1
    BOM.append(_item(sl_no, "AC CABLE", "AC", "NA", "4 SQ.MM", "Mardia/Polycab", AC_CABLE_METERS * factor, "Mtr"))
    sl_no += 1

    if project.earth_selected:
        earth_qty = 2 if project.earth_covers_ac_and_dc else 1
        BOM.append(_item(sl_no, "Earthing", material, "NA", "3 Feet", MNRE_MAKE, earth_qty, "Set"))
        sl_no += 1

    if project.lightning_arrest:
        BOM.append(_item(sl_no, "Lighting Arrestor", material, "NA", "3 Feet", MNRE_MAKE, 1, "Set"))
        sl_no += 1

    if project.electrical_accessories:
        accessories_qty = project.electrical_count or capacity or 1
        BOM.append(_item(sl_no, "Electrical Accessories", "NA", "NA", rating, MNRE_MAKE, accessories_qty, "Set"))
        sl_no += 1

    BOM.append(_item(sl_no, "BOS (PVC pipe/Hose/etc)", "As Site Requirement", "-", "-", MNRE_MAKE, 1, "Set"))
    sl_no += 1
    BOM.append(_item(
        sl_no, "Installation & Commissioning", "With Well trained and Experienced Persons",
        "-", "-", MNRE_MAKE, Quantity.undecided(), "Nos",
    ))
    return BOM


# --- Water heater / water pump: one aggregated row priced per unit ---

def _unit_price_from_project_value(project) -> float:
    return project.project_value or 0.0


def _unit_price_from_customer_payment(project) -> float:
    if not project.customer_payment:
        return 0.0
    return round_half_up(project.customer_payment / project.qty)


def _unit_price_from_base_and_gst(project) -> float:
    if not project.base_price or project.base_price <= 0:
        return 0.0
    total = project.base_price + (project.gst_amount or 0)
    if project.qty > 1:
        return round_half_up(total / project.qty)
    return total


# Upstream records are sometimes incomplete; the first source giving a non-zero price wins
UNIT_PRICE_SOURCES = [
    ("projectValue", _unit_price_from_project_value),
    ("customerPayment", _unit_price_from_customer_payment),
    ("basePrice+gstAmount", _unit_price_from_base_and_gst),
]


def resolve_unit_price(project) -> float:
    for source, extractor in UNIT_PRICE_SOURCES:
        price = extractor(project)
        if price:
            _logger.debug("Unit price %s taken from %s", price, source)
            return price
    _logger.warning("No unit price available for %s project; rate and amount are 0", project.project_type)
    return 0.0


def _utility_row(project, start_sl_no, description, type_, volt, rating, make):
    unit_price = resolve_unit_price(project)
    return _item(
        start_sl_no, description, type_, volt, rating, make, project.qty, "Nos",
        rate=round_half_up(unit_price),
        amount=round_half_up(unit_price * project.qty),
    )


def generate_water_heater_bom(project, alerts, start_sl_no=1):
    return [_utility_row(
        project, start_sl_no, describe_water_heater(project), "Water Heater System", "NA",
        f"{project.litre} LPD", project.brand or "Standard",
    )]


def generate_water_pump_bom(project, alerts, start_sl_no=1):
    return [_utility_row(
        project, start_sl_no, describe_water_pump_bom(project), "Water Pump System", "DC",
        f"{drive_hp_whole(project)} HP", "Standard",
    )]


def generate_bill_of_materials(project, alerts=None):
    """BOM for any project variant; an unknown variant yields an empty list."""
    # Imported here: the registry module imports this one
    from solar_quote.services.variants import strategy_for

    if alerts is None:
        alerts = []
    strategy = strategy_for(project)
    if strategy is None:
        return []
    return strategy.bom(project, alerts)
