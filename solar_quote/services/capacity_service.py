from solar_quote.utils import format_number, parse_leading_int, round2, round_half_up


def calculate_system_kw(panel_watts, panel_count) -> float:
    """
    Array capacity in kW: watts x panels / 1000, to 2 decimals.
    Accepts "540W"-style strings; anything non-positive or unparseable gives 0.
    """
    watts = parse_leading_int(panel_watts)
    count = parse_leading_int(panel_count)
    if watts is None or count is None or watts <= 0 or count <= 0:
        return 0.0
    return round2(watts * count / 1000)


def round_for_rate(kw: float) -> float:
    """Divisor for per-kW rates. Sub-kW systems keep their decimals (0.68 stays 0.68)."""
    if kw <= 0:
        return 0
    if kw < 1:
        return kw
    return round_half_up(kw)


def format_kw_for_display(kw: float) -> str:
    # 0.50 -> "0.5", 0.68 -> "0.68", 3.5 -> "4"
    if kw < 1:
        text = f"{kw:.2f}".rstrip("0").rstrip(".")
        return text or "0"
    return str(round_half_up(kw))


def panel_mounting_rating(kw: float) -> str:
    """Structure rating shown in the BOM: same sub-kW rule as round_for_rate."""
    return format_number(round_for_rate(kw))
