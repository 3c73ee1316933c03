"""Input and result records for the GP, commission and working-days calculators."""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

GPProfileKey = Literal["aus_contractor", "aus_fte", "php_contractor", "php_fte", "offshore"]
GPMode = Literal["client_rate", "pay_rate", "target_margin"]


class GPProfile(BaseModel):
    """Fixed defaults and on-cost toggles for one engagement type."""

    key: GPProfileKey
    label: str
    income_basis: Literal["daily_rate", "salary_package"] = "daily_rate"
    daily_rate: float = 0.0
    salary_package: float = 0.0
    margin_percent: float = 35.0
    client_rate: float = 0.0
    payroll_tax: bool = False
    workcover: bool = False
    leave_movements: bool = False
    lsl_movements: bool = False
    working_days: int = 220
    income_days: Optional[int] = Field(default=None, description="Days used to annualise the daily rate, if not working_days")
    extra_expenses: bool = False
    extra_expenses_amount: float = 0.0
    thirteenth_month: bool = False
    hmo: float = 0.0
    currency: str = "AUD"


class GPInputs(BaseModel):
    """User-entered values. Unset fields take the profile default."""

    profile: GPProfileKey = "aus_contractor"
    mode: GPMode = "client_rate"
    daily_rate: Optional[float] = Field(default=None, ge=0)
    salary_package: Optional[float] = Field(default=None, ge=0)
    margin_percent: Optional[float] = Field(default=None, lt=100)
    client_rate: Optional[float] = Field(default=None, ge=0)
    working_days: Optional[int] = Field(default=None, gt=0)
    payroll_tax: Optional[bool] = None
    workcover: Optional[bool] = None
    leave_movements: Optional[bool] = None
    lsl_movements: Optional[bool] = None
    extra_expenses: Optional[bool] = None
    extra_expenses_amount: Optional[float] = Field(default=None, ge=0)
    thirteenth_month: Optional[bool] = None
    hmo: Optional[float] = Field(default=None, ge=0)
    country: Optional[str] = Field(default=None, description="Offshore country, selects the local currency")
    exchange_rate: Optional[float] = Field(default=None, gt=0, description="Local currency -> AUD")


class GPResult(BaseModel):
    """Cost breakdown and margin for one GP calculation."""

    profile: GPProfileKey
    mode: GPMode
    daily_rate: float
    salary_package: float
    annual_income: float
    payroll_tax: float
    workcover: float
    leave_movements: float
    lsl_movements: float
    on_cost_percent: float
    on_cost_total: float
    extra_expenses: float
    thirteenth_month: float
    hmo: float
    total_cost: float
    daily_cost: float
    client_rate: float
    margin_percent: float
    margin_amount: float
    annual_profit: float
    annual_revenue: float
    working_days: int
    currency: str = "AUD"
    exchange_rate: Optional[float] = None
    monthly_local_salary: Optional[float] = None


class CommissionTier(BaseModel):
    tier: int
    min_revenue: float
    max_revenue: Optional[float] = None
    base_gp: Optional[float] = None
    base_rate: float = 0.0


class BonusBand(BaseModel):
    """Bonus paid when GP falls in [min_gp, max_gp) for a tier."""

    tier: int
    min_gp: float
    max_gp: float
    amount: float = 0.0
    rate: Optional[float] = Field(default=None, description="Bonus as a rate on commissionable revenue")


class CommissionInputs(BaseModel):
    revenue: float = Field(..., ge=0)
    gp_percent: float = Field(..., ge=0, le=1, description="Gross profit as a fraction, e.g. 0.35")
    schedule: Literal["v1", "v2", "v3"] = "v1"


class CommissionResult(BaseModel):
    """BDM commission outcome and how it was reached."""

    tier: int
    revenue: float
    gp_percent: float
    commission_rate: float
    commissionable_revenue: float
    base_commission: float
    bonus: float
    total_commission: float
    gross_profit: float
    profit_before_commission: float
    profit_after_commission: float
    commission_percent_of_revenue: float
    after_commission_gp_percent: float
    threshold_met: bool
    calculation_details: List[str] = Field(default_factory=list)


class CustomHoliday(BaseModel):
    """Inclusive date range excluded from working days."""

    name: str
    start: date
    end: date

    @model_validator(mode="after")
    def _check_range(self) -> "CustomHoliday":
        if self.end < self.start:
            raise ValueError("custom holiday end must not be before start")
        return self


class PublicHoliday(BaseModel):
    day: date
    name: str
    counties: Optional[List[str]] = None


class WorkingDaysInputs(BaseModel):
    start: date
    end: date
    state: str = "NSW"
    include_start: bool = True
    include_end: bool = True
    hours_per_day: float = Field(default=8.0, gt=0)
    custom_holidays: List[CustomHoliday] = Field(default_factory=list)


class DayBreakdown(BaseModel):
    day: date
    kind: Literal["working", "weekend", "public_holiday", "custom_holiday"]
    name: str = ""


class WorkingDaysResult(BaseModel):
    total_days: int = 0
    working_days: int = 0
    weekend_days: int = 0
    public_holidays: int = 0
    custom_holidays: int = 0
    work_hours: float = 0.0
    holidays: List[DayBreakdown] = Field(default_factory=list, description="Non-working weekdays in range")
    error: Optional[str] = None
