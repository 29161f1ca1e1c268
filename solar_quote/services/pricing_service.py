import logging
import math

from solar_quote.constants import (
    DEFAULT_GST_PERCENTAGE,
    DEFAULT_RATE_PER_KW,
    WATER_HEATER_RATE_PER_LITRE,
    WATER_PUMP_RATE_PER_HP,
)
from solar_quote.models import PricingBreakdown
from solar_quote.services.capacity_service import calculate_system_kw, round_for_rate
from solar_quote.services.descriptions import (
    describe_hybrid,
    describe_off_grid,
    describe_on_grid,
    describe_water_heater,
    describe_water_pump,
    drive_hp_text,
)
from solar_quote.services.subsidy_service import calculate_subsidy
from solar_quote.utils import parse_leading_int, positive_zero, round2, round_half_up

_logger = logging.getLogger(__name__)

SOLAR_DESCRIPTIONS = {
    "on_grid": describe_on_grid,
    "off_grid": describe_off_grid,
    "hybrid": describe_hybrid,
}


def _gst_factor(project) -> float:
    return 1 + (project.gst_percentage or DEFAULT_GST_PERCENTAGE) / 100


def _per_kw(amount, kw_divisor) -> int:
    if not kw_divisor:
        return 0
    return round_half_up(amount / kw_divisor)


def _breakdown(project, property_type, description, kw, quantity, rate_per_kw, gst_per_kw,
               base_price, gst_amount, value_with_gst):
    """Subsidy, whole-rupee total and roundoff are computed the same way for every variant."""
    subsidy = calculate_subsidy(kw, property_type, project.project_type)
    total_cost = int(math.floor(value_with_gst))
    roundoff = positive_zero(round2(total_cost - value_with_gst))

    return PricingBreakdown(
        description=description,
        kw=kw,
        quantity=quantity,
        rate_per_kw=rate_per_kw,
        gst_per_kw=gst_per_kw,
        gst_percentage=project.gst_percentage or DEFAULT_GST_PERCENTAGE,
        base_price=round_half_up(base_price),
        gst_amount=round_half_up(gst_amount),
        value_with_gst=round2(value_with_gst),
        total_cost=total_cost,
        subsidy_amount=subsidy,
        customer_payment=total_cost - subsidy,
        roundoff=roundoff,
    )


def calculate_solar_pricing(project, property_type=None) -> PricingBreakdown:
    """
    On-grid / off-grid / hybrid. project_value is the GST-inclusive total; without it the
    total is synthesized from price_per_kw (or the variant's default rate) and the panel kW.
    """
    gst_factor = _gst_factor(project)
    kw = calculate_system_kw(project.panel_watts, project.panel_count)

    if project.project_value:
        value_with_gst = project.project_value
    else:
        rate = project.price_per_kw or DEFAULT_RATE_PER_KW[project.project_type]
        value_with_gst = rate * kw * gst_factor

    base_price = round_half_up(value_with_gst / gst_factor)
    gst_amount = value_with_gst - base_price

    # Sub-kW systems divide by their real capacity, not by a rounded-down 0
    divisor = round_for_rate(kw)

    return _breakdown(
        project,
        property_type,
        description=SOLAR_DESCRIPTIONS[project.project_type](project, kw),
        kw=kw,
        quantity=1,
        rate_per_kw=_per_kw(base_price, divisor),
        gst_per_kw=_per_kw(gst_amount, divisor),
        base_price=base_price,
        gst_amount=gst_amount,
        value_with_gst=value_with_gst,
    )


def _utility_pricing(project, property_type, description, per_unit) -> PricingBreakdown:
    """Water heater / water pump: per_unit is one unit's price including GST."""
    qty = project.qty
    per_unit_base = round_half_up(per_unit / _gst_factor(project))
    gst_amount = round_half_up((per_unit - per_unit_base) * qty)

    return _breakdown(
        project,
        property_type,
        description=description,
        # Renderers read kw as the unit count for these products
        kw=qty,
        quantity=qty,
        rate_per_kw=per_unit_base,
        gst_per_kw=_per_kw(gst_amount, qty),
        base_price=round_half_up(per_unit_base * qty),
        gst_amount=gst_amount,
        value_with_gst=round_half_up(per_unit * qty),
    )


def calculate_water_heater_pricing(project, property_type=None) -> PricingBreakdown:
    per_unit = project.project_value or project.litre * WATER_HEATER_RATE_PER_LITRE * _gst_factor(project)
    return _utility_pricing(project, property_type, describe_water_heater(project), per_unit)


def calculate_water_pump_pricing(project, property_type=None) -> PricingBreakdown:
    hp = parse_leading_int(drive_hp_text(project), 1)
    per_unit = project.project_value or hp * WATER_PUMP_RATE_PER_HP * _gst_factor(project)
    return _utility_pricing(project, property_type, describe_water_pump(project), per_unit)


def calculate_pricing_breakdown(project, property_type=None):
    """Pricing for any project variant; None when the variant is not recognized."""
    # Imported here: the registry module imports this one
    from solar_quote.services.variants import strategy_for

    strategy = strategy_for(project)
    if strategy is None:
        return None
    return strategy.pricing(project, property_type)
