from solar_quote.constants import (
    BACKUP_SYSTEM_LOSS,
    BACKUP_WATTS_PER_AH,
    DEFAULT_BATTERY_AH,
    DEFAULT_USAGE_WATTS,
)
from solar_quote.models import BackupSolutions
from solar_quote.utils import parse_leading_int, round2, round_half_up


def calculate_backup_watts(battery_ah, battery_count) -> int:
    # (AH x 10 x count) less 3 % system loss
    ah = parse_leading_int(battery_ah, parse_leading_int(DEFAULT_BATTERY_AH))
    count = battery_count or 1
    base_watts = ah * BACKUP_WATTS_PER_AH * count
    return round_half_up(base_watts - base_watts * BACKUP_SYSTEM_LOSS)


def calculate_backup_solutions(project) -> BackupSolutions:
    """Estimated runtime of the battery bank for each load profile (off-grid / hybrid)."""
    backup_watts = calculate_backup_watts(project.battery_ah, project.battery_count)

    usage_watts = list(DEFAULT_USAGE_WATTS)
    if project.backup_solutions and project.backup_solutions.usage_watts:
        usage_watts = list(project.backup_solutions.usage_watts)

    backup_hours = [
        round2(backup_watts / usage) if usage > 0 else 0.0
        for usage in usage_watts
    ]
    return BackupSolutions(
        backup_watts=backup_watts,
        usage_watts=usage_watts,
        backup_hours=backup_hours,
    )
