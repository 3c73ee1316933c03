"""Gross-profit calculators for contractor and FTE placements.

One engine serves every engagement type; a GPProfile supplies the defaults
and which on-costs apply. Each calculation mode solves for one unknown
(client rate, pay rate or margin) and then runs the forward cost model once
so every output is consistent with the solved value.
"""

from typing import Dict, Optional

from cm_calculators.config import (
    LEAVE_MOVEMENTS_RATE,
    LSL_MOVEMENTS_RATE,
    OFFSHORE_COUNTRIES,
    PAYROLL_TAX_RATE,
    PHP_FTE_INCOME_DAYS,
    WORKCOVER_RATE,
    WORKING_DAYS_PER_MONTH,
)
from cm_calculators.schemas.calculators import GPInputs, GPProfile, GPResult
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

GP_PROFILES: Dict[str, GPProfile] = {
    "aus_contractor": GPProfile(
        key="aus_contractor", label="AUS Contractor",
        daily_rate=700, margin_percent=35, client_rate=950,
        payroll_tax=True, workcover=True,
    ),
    "aus_fte": GPProfile(
        key="aus_fte", label="AUS FTE", income_basis="salary_package",
        salary_package=110000, margin_percent=35, client_rate=1050,
        payroll_tax=True, workcover=True, leave_movements=True, lsl_movements=True,
    ),
    "php_contractor": GPProfile(
        key="php_contractor", label="PHP Contractor",
        daily_rate=200, margin_percent=50, client_rate=266,
        extra_expenses=True, extra_expenses_amount=100, currency="PHP",
    ),
    "php_fte": GPProfile(
        key="php_fte", label="PHP FTE",
        daily_rate=210, margin_percent=50, client_rate=286,
        income_days=PHP_FTE_INCOME_DAYS, thirteenth_month=True, hmo=150, currency="PHP",
    ),
    "offshore": GPProfile(
        key="offshore", label="Offshore Contractor",
        daily_rate=200, margin_percent=50, client_rate=265.73,
        extra_expenses=True, extra_expenses_amount=150, currency="LKR",
    ),
}


class _Settings:
    """Profile defaults overlaid with whatever the user entered."""

    def __init__(self, profile: GPProfile, inputs: GPInputs):
        def pick(name):
            value = getattr(inputs, name)
            return getattr(profile, name) if value is None else value

        self.profile = profile
        self.daily_rate: float = pick("daily_rate")
        self.salary_package: float = pick("salary_package")
        self.margin_percent: float = pick("margin_percent")
        self.client_rate: float = pick("client_rate")
        self.working_days: int = pick("working_days")
        self.payroll_tax: bool = pick("payroll_tax")
        self.workcover: bool = pick("workcover")
        self.leave_movements: bool = pick("leave_movements")
        self.lsl_movements: bool = pick("lsl_movements")
        self.extra_expenses: bool = pick("extra_expenses")
        self.extra_expenses_amount: float = pick("extra_expenses_amount")
        self.thirteenth_month: bool = pick("thirteenth_month") and profile.key == "php_fte"
        self.hmo: float = pick("hmo") if profile.key == "php_fte" else 0.0
        self.income_days: int = profile.income_days or self.working_days

    @property
    def on_cost_percent(self) -> float:
        return (
            (PAYROLL_TAX_RATE if self.payroll_tax else 0.0)
            + (WORKCOVER_RATE if self.workcover else 0.0)
            + (LEAVE_MOVEMENTS_RATE if self.leave_movements else 0.0)
            + (LSL_MOVEMENTS_RATE if self.lsl_movements else 0.0)
        )

    @property
    def fixed_costs(self) -> float:
        return (self.extra_expenses_amount if self.extra_expenses else 0.0) + self.hmo

    def annual_income(self) -> float:
        if self.profile.income_basis == "salary_package":
            return self.salary_package
        return self.daily_rate * self.income_days

    def set_annual_income(self, income: float) -> None:
        if self.profile.income_basis == "salary_package":
            self.salary_package = income
        else:
            self.daily_rate = income / self.income_days

    def total_cost(self) -> float:
        income = self.annual_income()
        thirteenth = income / 12 if self.thirteenth_month else 0.0
        return income + income * self.on_cost_percent + self.fixed_costs + thirteenth


def solve_client_rate(daily_cost: float, margin_percent: float) -> float:
    """Client rate that leaves margin_percent of it as margin."""
    return daily_cost / (1 - margin_percent / 100)


def solve_margin_percent(client_rate: float, daily_cost: float) -> float:
    if not client_rate:
        return 0.0
    return (client_rate - daily_cost) / client_rate * 100


def solve_annual_income(settings: _Settings, client_rate: float, margin_percent: float) -> float:
    """Income whose total cost per day equals client_rate less the margin."""
    implied_total_cost = client_rate * (1 - margin_percent / 100) * settings.working_days
    multiplier = 1 + settings.on_cost_percent + (1 / 12 if settings.thirteenth_month else 0.0)
    return max(0.0, (implied_total_cost - settings.fixed_costs) / multiplier)


def monthly_local_salary(daily_rate_aud: float, exchange_rate: float) -> float:
    """Monthly salary in local currency for a daily AUD rate (exchange_rate is local -> AUD)."""
    return daily_rate_aud * WORKING_DAYS_PER_MONTH / exchange_rate


def daily_rate_from_monthly(monthly_local: float, exchange_rate: float) -> float:
    return monthly_local * exchange_rate / WORKING_DAYS_PER_MONTH


def currency_for(profile: GPProfile, country: Optional[str]) -> str:
    if profile.key == "offshore" and country:
        return OFFSHORE_COUNTRIES.get(country, profile.currency)
    return profile.currency


def calculate_gp(inputs: GPInputs) -> GPResult:
    """Solve the selected mode, then compute the full cost and margin breakdown."""
    profile = GP_PROFILES[inputs.profile]
    settings = _Settings(profile, inputs)

    if inputs.mode == "client_rate":
        daily_cost = settings.total_cost() / settings.working_days
        settings.client_rate = solve_client_rate(daily_cost, settings.margin_percent)
    elif inputs.mode == "pay_rate":
        settings.set_annual_income(solve_annual_income(settings, settings.client_rate, settings.margin_percent))
    else:
        daily_cost = settings.total_cost() / settings.working_days
        settings.margin_percent = solve_margin_percent(settings.client_rate, daily_cost)

    income = settings.annual_income()
    payroll_tax = income * PAYROLL_TAX_RATE if settings.payroll_tax else 0.0
    workcover = income * WORKCOVER_RATE if settings.workcover else 0.0
    leave = income * LEAVE_MOVEMENTS_RATE if settings.leave_movements else 0.0
    lsl = income * LSL_MOVEMENTS_RATE if settings.lsl_movements else 0.0
    thirteenth = income / 12 if settings.thirteenth_month else 0.0
    extra = settings.extra_expenses_amount if settings.extra_expenses else 0.0
    total_cost = settings.total_cost()
    daily_cost = total_cost / settings.working_days
    margin_amount = settings.client_rate - daily_cost

    currency = currency_for(profile, inputs.country)
    monthly = None
    if inputs.exchange_rate and profile.key in ("offshore", "php_contractor", "php_fte"):
        monthly = monthly_local_salary(settings.daily_rate, inputs.exchange_rate)

    result = GPResult(
        profile=profile.key,
        mode=inputs.mode,
        daily_rate=settings.daily_rate,
        salary_package=settings.salary_package,
        annual_income=income,
        payroll_tax=payroll_tax,
        workcover=workcover,
        leave_movements=leave,
        lsl_movements=lsl,
        on_cost_percent=settings.on_cost_percent,
        on_cost_total=payroll_tax + workcover + leave + lsl,
        extra_expenses=extra,
        thirteenth_month=thirteenth,
        hmo=settings.hmo,
        total_cost=total_cost,
        daily_cost=daily_cost,
        client_rate=settings.client_rate,
        margin_percent=settings.margin_percent,
        margin_amount=margin_amount,
        annual_profit=margin_amount * settings.working_days,
        annual_revenue=settings.client_rate * settings.working_days,
        working_days=settings.working_days,
        currency=currency,
        exchange_rate=inputs.exchange_rate,
        monthly_local_salary=monthly,
    )
    logger.info(
        "GP %s/%s: client rate %.2f, daily cost %.2f, margin %.2f%%",
        profile.key, inputs.mode, result.client_rate, result.daily_cost, result.margin_percent,
    )
    return result
