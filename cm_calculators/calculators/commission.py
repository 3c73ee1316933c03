"""BDM commission calculator.

Revenue selects a tier; GP selects the tier's commission rate. Commission is
paid on revenue above $1M, and a fixed bonus applies for GP just under the
tier minimum. Three schedules are kept: v1 (current), v2 and v3.
"""

from typing import Dict, List, Optional, Tuple

from cm_calculators.schemas.calculators import (
    BonusBand,
    CommissionInputs,
    CommissionResult,
    CommissionTier,
)
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

COMMISSION_THRESHOLD = 1_000_000
GP_MATCH_TOLERANCE = 0.005

RateTable = List[Tuple[float, float]]


def _steps(first_gp: float, rates: List[float]) -> RateTable:
    """(gp, rate) pairs for consecutive whole-percent GP values starting at first_gp."""
    return [(round(first_gp + i * 0.01, 2), rate) for i, rate in enumerate(rates)]


def _tiers(rates: List[Tuple[Optional[float], float]]) -> List[CommissionTier]:
    bounds = [(0, COMMISSION_THRESHOLD), (1_000_000, 1_500_000), (1_500_000, 4_000_000),
              (4_000_000, 6_000_000), (6_000_000, None)]
    return [
        CommissionTier(tier=i, min_revenue=lo, max_revenue=hi, base_gp=gp, base_rate=rate)
        for i, ((lo, hi), (gp, rate)) in enumerate(zip(bounds, rates))
    ]


_FIXED_BONUSES = [
    BonusBand(tier=1, min_gp=0.33, max_gp=0.34, amount=3500),
    BonusBand(tier=1, min_gp=0.34, max_gp=0.35, amount=4500),
    BonusBand(tier=2, min_gp=0.31, max_gp=0.32, amount=10000),
    BonusBand(tier=2, min_gp=0.32, max_gp=0.33, amount=15000),
    BonusBand(tier=3, min_gp=0.28, max_gp=0.29, amount=5000),
    BonusBand(tier=3, min_gp=0.29, max_gp=0.30, amount=10000),
    BonusBand(tier=4, min_gp=0.26, max_gp=0.27, amount=8000),
    BonusBand(tier=4, min_gp=0.27, max_gp=0.28, amount=16000),
]

SCHEDULES: Dict[str, dict] = {
    "v1": {
        "tiers": _tiers([(None, 0.0), (0.35, 0.05), (0.33, 0.04), (0.30, 0.03), (0.28, 0.02)]),
        "rates": {
            1: _steps(0.35, [0.050, 0.051, 0.052, 0.053, 0.054, 0.055, 0.057, 0.059,
                             0.061, 0.063, 0.065, 0.067, 0.069, 0.071, 0.073, 0.075]),
            2: _steps(0.33, [0.040, 0.040, 0.040, 0.041, 0.042, 0.043, 0.044, 0.045, 0.047,
                             0.049, 0.051, 0.053, 0.055, 0.057, 0.059, 0.061, 0.063, 0.065]),
            3: _steps(0.30, [0.030] * 6 + [0.031, 0.032, 0.033, 0.034, 0.035, 0.037, 0.039,
                                           0.041, 0.043, 0.045, 0.047, 0.049, 0.051, 0.053, 0.055]),
            4: _steps(0.28, [0.020] * 8 + [0.021, 0.022, 0.023, 0.024, 0.025, 0.027, 0.029,
                                           0.031, 0.033, 0.035, 0.037, 0.039, 0.041, 0.043, 0.045]),
        },
        "bonuses": _FIXED_BONUSES,
    },
    "v2": {
        "tiers": _tiers([(None, 0.0), (0.35, 0.045), (0.33, 0.035), (0.30, 0.0275), (0.28, 0.02)]),
        "rates": {
            1: _steps(0.35, [0.045, 0.046, 0.047, 0.048, 0.049, 0.050, 0.052, 0.054,
                             0.056, 0.058, 0.060, 0.062, 0.064, 0.066, 0.068, 0.070]),
            2: _steps(0.33, [0.035, 0.035, 0.035, 0.036, 0.037, 0.038, 0.039, 0.040, 0.042,
                             0.044, 0.046, 0.048, 0.050, 0.052, 0.054, 0.056, 0.058, 0.060]),
            # 0.37 -> 0.0205 is as published in the v2 schedule
            3: _steps(0.30, [0.0275] * 6 + [0.0285, 0.0205, 0.0305, 0.0315, 0.0325, 0.0345, 0.0365,
                                            0.0385, 0.0405, 0.0425, 0.0445, 0.0465, 0.0485, 0.0505, 0.0525]),
            4: _steps(0.28, [0.020] * 8 + [0.021, 0.022, 0.023, 0.024, 0.025, 0.027, 0.029,
                                           0.031, 0.033, 0.035, 0.037, 0.039, 0.041, 0.043, 0.045]),
        },
        "bonuses": _FIXED_BONUSES,
    },
    "v3": {
        "tiers": _tiers([(None, 0.0), (0.35, 0.045), (0.35, 0.025), (0.33, 0.022), (0.33, 0.02)]),
        "rates": {
            1: _steps(0.35, [0.045, 0.046, 0.047, 0.048, 0.049, 0.050] + [round(0.052 + i * 0.002, 3) for i in range(15)]),
            2: _steps(0.35, [0.025, 0.026, 0.027, 0.028, 0.029, 0.030] + [round(0.032 + i * 0.002, 3) for i in range(15)]),
            3: _steps(0.33, [0.022, 0.022, 0.023, 0.024, 0.025, 0.026, 0.027, 0.028]
                      + [round(0.030 + i * 0.002, 3) for i in range(15)]),
            4: _steps(0.33, [0.020, 0.020, 0.021, 0.022, 0.023, 0.024, 0.025, 0.026]
                      + [round(0.028 + i * 0.002, 3) for i in range(15)]),
        },
        # Bonus is a rate on revenue above $1M
        "bonuses": [
            BonusBand(tier=1, min_gp=0.33, max_gp=0.34, rate=0.007),
            BonusBand(tier=1, min_gp=0.34, max_gp=0.35, rate=0.009),
            BonusBand(tier=2, min_gp=0.33, max_gp=0.34, rate=0.0025),
            BonusBand(tier=2, min_gp=0.34, max_gp=0.35, rate=0.0035),
            BonusBand(tier=3, min_gp=0.31, max_gp=0.32, rate=0.0025),
            BonusBand(tier=3, min_gp=0.32, max_gp=0.33, rate=0.0035),
            BonusBand(tier=4, min_gp=0.31, max_gp=0.32, rate=0.002),
            BonusBand(tier=4, min_gp=0.32, max_gp=0.33, rate=0.003),
        ],
    },
}


def find_tier(revenue: float, schedule: str = "v1") -> CommissionTier:
    """Tier whose [min, max) revenue range holds revenue."""
    tiers: List[CommissionTier] = SCHEDULES[schedule]["tiers"]
    for tier in tiers:
        if revenue >= tier.min_revenue and (tier.max_revenue is None or revenue < tier.max_revenue):
            return tier
    return tiers[-1]


def meets_gp_threshold(tier: CommissionTier, gp: float) -> bool:
    return tier.base_gp is None or gp >= tier.base_gp


def commission_rate(tier: CommissionTier, gp: float, schedule: str = "v1") -> float:
    """GP-table rate for the tier, the base rate between table rows, 0 below the GP minimum."""
    if not meets_gp_threshold(tier, gp):
        return 0.0
    rate = tier.base_rate
    for table_gp, table_rate in SCHEDULES[schedule]["rates"].get(tier.tier, []):
        if abs(gp - table_gp) < GP_MATCH_TOLERANCE:
            rate = table_rate
            break
    return rate


def fixed_bonus(tier: CommissionTier, gp: float, revenue: float, schedule: str = "v1") -> Tuple[float, str]:
    """Bonus amount and its explanation, or (0, '') when no band applies."""
    for band in SCHEDULES[schedule]["bonuses"]:
        if band.tier == tier.tier and band.min_gp <= gp < band.max_gp:
            gp_range = f"{band.min_gp * 100:.0f}%-{band.max_gp * 100:.0f}%"
            if band.rate is not None:
                amount = (revenue - COMMISSION_THRESHOLD) * band.rate
                return amount, (
                    f"Fixed bonus calculated: (Revenue - $1,000,000) x {band.rate * 100:.2f}% = "
                    f"${amount:,.2f} for GP {gp_range}"
                )
            return band.amount, f"Fixed bonus of ${band.amount:,.0f} applied for GP {gp_range}"
    return 0.0, ""


def calculate_commission(inputs: CommissionInputs) -> CommissionResult:
    """Full commission breakdown for one revenue / GP pair."""
    revenue, gp, schedule = inputs.revenue, inputs.gp_percent, inputs.schedule
    tier = find_tier(revenue, schedule)
    threshold_met = meets_gp_threshold(tier, gp)
    rate = commission_rate(tier, gp, schedule)
    details: List[str] = []

    commissionable = 0.0
    base_commission = 0.0
    if tier.tier == 0:
        details.append("Tier 0: No commission for revenue up to $1,000,000")
    else:
        commissionable = revenue - COMMISSION_THRESHOLD
        details.append(
            f"Tier {tier.tier}: Commission calculated on revenue above $1,000,000, which is ${commissionable:,.0f}"
        )
        if not threshold_met:
            details.append(
                f"GP of {gp * 100:.0f}% does not meet the minimum threshold of {tier.base_gp * 100:.0f}% "
                "required for percentage-based commission"
            )
            details.append("Commission rate: 0.00%")
        else:
            base_commission = commissionable * rate
            details.append(f"Commission rate for {gp * 100:.0f}% GP: {rate * 100:.2f}%")
            details.append(
                f"Base commission: ${commissionable:,.0f} x {rate * 100:.2f}% = ${base_commission:,.2f}"
            )

    # Bonus applies even when the GP threshold is missed
    bonus, bonus_detail = fixed_bonus(tier, gp, revenue, schedule)
    if bonus > 0:
        details.append(bonus_detail)

    total = base_commission + bonus
    gross_profit = revenue * gp
    profit_after = gross_profit - total
    commission_pct = (total / revenue * 100) if revenue else 0.0
    after_gp_pct = (profit_after / revenue * 100) if revenue else 0.0

    details.append(f"Gross Profit ({gp * 100:.1f}% of ${revenue:,.0f}): ${gross_profit:,.2f}")
    details.append(f"Profit Before Commission: ${gross_profit:,.2f}")
    details.append(f"Profit After Commission: ${profit_after:,.2f}")
    details.append(f"Commission as Percentage of Revenue: {commission_pct:.2f}%")
    details.append(f"After-Commission GP Percentage: {after_gp_pct:.2f}%")

    logger.info(
        "Commission (%s) for revenue %.0f at GP %.2f: tier %s, rate %.4f, total %.2f",
        schedule, revenue, gp, tier.tier, rate, total,
    )
    return CommissionResult(
        tier=tier.tier,
        revenue=revenue,
        gp_percent=gp,
        commission_rate=rate,
        commissionable_revenue=commissionable,
        base_commission=base_commission,
        bonus=bonus,
        total_commission=total,
        gross_profit=gross_profit,
        profit_before_commission=gross_profit,
        profit_after_commission=profit_after,
        commission_percent_of_revenue=commission_pct,
        after_commission_gp_percent=after_gp_pct,
        threshold_met=threshold_met,
        calculation_details=details,
    )
