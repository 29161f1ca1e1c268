from solar_quote.constants import SUBSIDY_PROJECT_TYPES, SUBSIDY_PROPERTY_TYPES, SUBSIDY_TIERS


def _tag(value) -> str:
    # Accepts ProjectType members as well as plain strings
    return getattr(value, "value", value) or ""


def calculate_subsidy(kw: float, property_type, project_type) -> int:
    """
    Government subsidy for residential rooftop systems (on-grid and hybrid only).
    Tier bounds are inclusive: 1 kW gets the first bracket, 2 kW the second.
    """
    if _tag(property_type) not in SUBSIDY_PROPERTY_TYPES:
        return 0
    if _tag(project_type) not in SUBSIDY_PROJECT_TYPES:
        return 0

    for upper_kw, amount in SUBSIDY_TIERS:
        if kw <= upper_kw:
            return amount
    return 0
