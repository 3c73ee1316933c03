"""Financial calculators: gross profit, BDM commission and working days."""

from cm_calculators.calculators.commission import calculate_commission
from cm_calculators.calculators.gp import GP_PROFILES, calculate_gp
from cm_calculators.calculators.working_days import calculate_working_days, count_working_days

__all__ = [
    "calculate_gp",
    "GP_PROFILES",
    "calculate_commission",
    "calculate_working_days",
    "count_working_days",
]
