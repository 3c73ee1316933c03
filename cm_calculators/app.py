"""
CloudMarc calculators – Streamlit frontend.
No business logic in layout; calculations live in calculators/, lookups in services/.
"""

from datetime import date
from typing import List

import httpx
import streamlit as st
from pydantic import ValidationError

from cm_calculators.calculators.commission import calculate_commission
from cm_calculators.calculators.gp import GP_PROFILES, calculate_gp, currency_for, daily_rate_from_monthly
from cm_calculators.calculators.working_days import (
    END_SHORTCUTS,
    START_SHORTCUTS,
    apply_end_shortcut,
    apply_start_shortcut,
    calculate_working_days,
    default_custom_holidays,
)
from cm_calculators.config import (
    AUSTRALIAN_STATES,
    CONVERT_CV_API_URL,
    DATA_DIR,
    DEFAULT_HOURS_PER_DAY,
    DEFAULT_POSITION_TITLE,
    HTTP_TIMEOUT_SECONDS,
    OFFSHORE_COUNTRIES,
)
from cm_calculators.schemas.calculators import CommissionInputs, CustomHoliday, GPInputs, WorkingDaysInputs
from cm_calculators.services.account_managers import load_account_managers
from cm_calculators.services.exchange_rates import get_exchange_rate
from cm_calculators.utils.helpers import format_currency, format_percent

PAGES = ["GP Calculator", "BDM Commission", "Working Days", "CV Converter"]

MODE_LABELS = {
    "client_rate": "Calculate client rate",
    "pay_rate": "Calculate pay rate",
    "target_margin": "Calculate margin",
}

START_SHORTCUT_LABELS = {
    "today": "Today",
    "next_month": "Next month (1st weekday)",
    "plus_7": "+7 days",
    "plus_14": "+14 days",
}
END_SHORTCUT_LABELS = {
    "plus_30": "+30 working days",
    "plus_120": "+120 working days",
    "plus_180": "+180 working days",
    "mid_year": "Mid year (30 Jun)",
    "year_end": "Year end (31 Dec)",
}


def _render_gp_page() -> None:
    """GP calculator: profile, mode, inputs, then the cost breakdown."""
    st.subheader("GP Calculator")
    col1, col2 = st.columns(2)
    with col1:
        profile_key = st.selectbox(
            "Calculator Type",
            options=list(GP_PROFILES.keys()),
            format_func=lambda k: GP_PROFILES[k].label,
            key="gp_profile",
        )
    with col2:
        mode = st.selectbox(
            "Calculation Mode",
            options=list(MODE_LABELS.keys()),
            format_func=MODE_LABELS.get,
            key="gp_mode",
        )
    profile = GP_PROFILES[profile_key]

    country = None
    exchange_rate = None
    if profile_key == "offshore":
        country = st.selectbox("Country", options=list(OFFSHORE_COUNTRIES.keys()), key="gp_country")
    currency = currency_for(profile, country)
    if currency != "AUD":
        exchange_rate = get_exchange_rate(currency)
        st.caption(f"1 {currency} = {exchange_rate} AUD" if exchange_rate else f"No exchange rate for {currency}")

    with st.expander("Configuration", expanded=False):
        c1, c2 = st.columns(2)
        with c1:
            payroll_tax = st.checkbox("Payroll tax", value=profile.payroll_tax, key=f"gp_pt_{profile_key}")
            workcover = st.checkbox("Workcover", value=profile.workcover, key=f"gp_wc_{profile_key}")
            leave = st.checkbox("Leave movements", value=profile.leave_movements, key=f"gp_lv_{profile_key}")
            lsl = st.checkbox("LSL movements", value=profile.lsl_movements, key=f"gp_lsl_{profile_key}")
        with c2:
            working_days = st.number_input("Working days", min_value=1, value=profile.working_days, key=f"gp_wd_{profile_key}")
            extra_expenses = st.checkbox("Extra expenses", value=profile.extra_expenses, key=f"gp_ex_{profile_key}")
            extra_amount = st.number_input(
                "Extra expenses amount ($)", min_value=0.0, value=float(profile.extra_expenses_amount),
                key=f"gp_exa_{profile_key}",
            )
            hmo = None
            thirteenth = None
            if profile_key == "php_fte":
                thirteenth = st.checkbox("13th month pay", value=profile.thirteenth_month, key="gp_13th")
                hmo = st.number_input("HMO ($)", min_value=0.0, value=float(profile.hmo), key="gp_hmo")

    c1, c2, c3 = st.columns(3)
    with c1:
        if profile.income_basis == "salary_package":
            pay_value = st.number_input(
                "Salary package", min_value=0.0, value=float(profile.salary_package),
                disabled=mode == "pay_rate", key=f"gp_pay_{profile_key}",
            )
        else:
            pay_value = st.number_input(
                "Daily rate (AUD)", min_value=0.0, value=float(profile.daily_rate),
                disabled=mode == "pay_rate", key=f"gp_pay_{profile_key}",
            )
            if exchange_rate and mode != "pay_rate":
                monthly = st.number_input(
                    f"or monthly salary ({currency})", min_value=0.0, value=0.0, key=f"gp_monthly_{profile_key}",
                )
                if monthly:
                    pay_value = daily_rate_from_monthly(monthly, exchange_rate)
    with c2:
        client_rate = st.number_input(
            "Daily client rate", min_value=0.0, value=float(profile.client_rate),
            disabled=mode == "client_rate", key=f"gp_client_{profile_key}",
        )
    with c3:
        margin = st.number_input(
            "Target margin (%)", min_value=0.0, max_value=99.0, value=float(profile.margin_percent),
            disabled=mode == "target_margin", key=f"gp_margin_{profile_key}",
        )

    pay_field = "salary_package" if profile.income_basis == "salary_package" else "daily_rate"
    try:
        result = calculate_gp(
            GPInputs(
                profile=profile_key,
                mode=mode,
                client_rate=client_rate,
                margin_percent=margin,
                working_days=int(working_days),
                payroll_tax=payroll_tax,
                workcover=workcover,
                leave_movements=leave,
                lsl_movements=lsl,
                extra_expenses=extra_expenses,
                extra_expenses_amount=extra_amount,
                thirteenth_month=thirteenth,
                hmo=hmo,
                country=country,
                exchange_rate=exchange_rate,
                **{pay_field: pay_value},
            )
        )
    except (ValidationError, ZeroDivisionError) as e:
        st.error(f"Invalid inputs: {e}")
        return

    st.divider()
    m1, m2, m3 = st.columns(3)
    m1.metric("Daily client rate", format_currency(result.client_rate))
    m2.metric("Target margin", format_percent(result.margin_percent))
    if profile.income_basis == "salary_package":
        m3.metric("Salary package", format_currency(result.salary_package))
    else:
        m3.metric("Daily rate", format_currency(result.daily_rate))
    if result.monthly_local_salary is not None:
        st.caption(f"Monthly salary: {format_currency(result.monthly_local_salary, result.currency)}")

    rows = [
        ("Annual income", result.annual_income),
        ("Payroll tax", result.payroll_tax),
        ("Workcover", result.workcover),
        ("Leave movements", result.leave_movements),
        ("LSL movements", result.lsl_movements),
        ("Extra expenses", result.extra_expenses),
        ("13th month pay", result.thirteenth_month),
        ("HMO", result.hmo),
        ("Total cost", result.total_cost),
        ("Daily cost", result.daily_cost),
        ("Margin per day", result.margin_amount),
        ("Annual profit", result.annual_profit),
        ("Annual revenue", result.annual_revenue),
    ]
    with st.expander("Cost breakdown", expanded=True):
        for label, value in rows:
            st.markdown(f"- **{label}:** {format_currency(value)}")


def _render_commission_page() -> None:
    st.subheader("BDM Commission Calculator")
    c1, c2, c3 = st.columns(3)
    with c1:
        revenue = st.number_input("Revenue ($)", min_value=0.0, value=1_500_000.0, step=50_000.0, key="bdm_revenue")
    with c2:
        gp_pct = st.number_input("GP (%)", min_value=0.0, max_value=100.0, value=35.0, step=1.0, key="bdm_gp")
    with c3:
        schedule = st.selectbox("Schedule", options=["v1", "v2", "v3"], key="bdm_schedule")

    result = calculate_commission(CommissionInputs(revenue=revenue, gp_percent=gp_pct / 100, schedule=schedule))
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Tier", f"Tier {result.tier}")
    m2.metric("Commission rate", format_percent(result.commission_rate * 100))
    m3.metric("Fixed bonus", format_currency(result.bonus))
    m4.metric("Total commission", format_currency(result.total_commission))
    st.caption(
        f"Profit after commission: {format_currency(result.profit_after_commission)} · "
        f"After-commission GP: {format_percent(result.after_commission_gp_percent)}"
    )
    with st.expander("Calculation details"):
        for line in result.calculation_details:
            st.markdown(f"- {line}")


def _custom_holidays_state() -> List[CustomHoliday]:
    if "custom_holidays" not in st.session_state:
        st.session_state["custom_holidays"] = default_custom_holidays(date.today().year)
    return st.session_state["custom_holidays"]


def _render_working_days_page() -> None:
    st.subheader("Australian Working Days Calculator")
    today = date.today()
    if "wd_start" not in st.session_state:
        st.session_state["wd_start"] = apply_start_shortcut("today", today)
    if "wd_end" not in st.session_state:
        st.session_state["wd_end"] = apply_end_shortcut("plus_30", st.session_state["wd_start"], today)

    # ----- Shortcuts -----
    s_cols = st.columns(len(START_SHORTCUTS))
    for col, name in zip(s_cols, START_SHORTCUTS):
        if col.button(START_SHORTCUT_LABELS[name], key=f"wd_s_{name}"):
            st.session_state["wd_start"] = apply_start_shortcut(name, today)
    e_cols = st.columns(len(END_SHORTCUTS))
    for col, name in zip(e_cols, END_SHORTCUTS):
        if col.button(END_SHORTCUT_LABELS[name], key=f"wd_e_{name}"):
            st.session_state["wd_end"] = apply_end_shortcut(name, st.session_state["wd_start"], today)

    c1, c2, c3 = st.columns(3)
    with c1:
        start = st.date_input("Start date", key="wd_start")
        include_start = st.checkbox("Include start date", value=True, key="wd_inc_start")
    with c2:
        end = st.date_input("End date", key="wd_end")
        include_end = st.checkbox("Include end date", value=True, key="wd_inc_end")
    with c3:
        state = st.selectbox("State", options=AUSTRALIAN_STATES, key="wd_state")
        hours = st.number_input("Hours per day", min_value=0.5, value=DEFAULT_HOURS_PER_DAY, key="wd_hours")

    custom = _custom_holidays_state()
    with st.expander("Custom holidays"):
        for i, holiday in enumerate(list(custom)):
            hc1, hc2 = st.columns([4, 1])
            hc1.markdown(f"**{holiday.name}:** {holiday.start} to {holiday.end}")
            if hc2.button("Remove", key=f"wd_rm_{i}"):
                custom.pop(i)
                st.rerun()
        n1, n2, n3 = st.columns(3)
        new_name = n1.text_input("Name", key="wd_new_name")
        new_start = n2.date_input("From", value=today, key="wd_new_start")
        new_end = n3.date_input("To", value=today, key="wd_new_end")
        if st.button("Add custom holiday", key="wd_add"):
            try:
                custom.append(CustomHoliday(name=new_name or "Custom holiday", start=new_start, end=new_end))
            except ValidationError as e:
                st.error(f"Invalid holiday: {e.errors()[0]['msg']}")

    with st.spinner("Loading public holidays…"):
        result = calculate_working_days(
            WorkingDaysInputs(
                start=start,
                end=end,
                state=state,
                include_start=include_start,
                include_end=include_end,
                hours_per_day=hours,
                custom_holidays=custom,
            )
        )
    if result.error:
        if result.total_days == 0:
            st.error(result.error)
            return
        st.warning(result.error)

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Working days", result.working_days)
    m2.metric("Work hours", f"{result.work_hours:g}")
    m3.metric("Public holidays", result.public_holidays)
    m4.metric("Custom holidays", result.custom_holidays)
    st.caption(f"Total days: {result.total_days} · Weekend days: {result.weekend_days}")
    if result.holidays:
        with st.expander("Holidays in range"):
            for day in result.holidays:
                st.markdown(f"- {day.day:%a %d %b %Y}: {day.name}")


def _post_cv(file_name: str, file_bytes: bytes, mime: str, position_title: str, manager_id: str) -> dict:
    """Send the upload to the converter API; raises httpx errors for the caller to show."""
    response = httpx.post(
        CONVERT_CV_API_URL,
        files={"file": (file_name, file_bytes, mime)},
        data={"positionTitle": position_title, "accountManager": manager_id},
        timeout=HTTP_TIMEOUT_SECONDS * 4,
    )
    body = response.json()
    if response.status_code != 200:
        raise RuntimeError(body.get("error") or f"Conversion failed ({response.status_code})")
    return body


def _render_cv_converter_page() -> None:
    st.subheader("CV Converter")
    st.markdown("*Convert a candidate CV into CloudMarc format (DOCX and PDF).*")
    managers = load_account_managers(DATA_DIR / "account_managers.json")
    uploaded = st.file_uploader("CV file", type=["pdf", "doc", "docx"], key="cv_file")
    position_title = st.text_input("Position title", placeholder=DEFAULT_POSITION_TITLE, key="cv_title")
    manager = st.selectbox(
        "Account manager", options=managers, format_func=lambda m: f"{m.name} ({m.email})", key="cv_manager",
    )
    if "cv_result" not in st.session_state:
        st.session_state["cv_result"] = None

    if st.button("Convert", type="primary", key="cv_convert", disabled=uploaded is None):
        with st.spinner("Converting CV…"):
            try:
                st.session_state["cv_result"] = _post_cv(
                    uploaded.name, uploaded.getvalue(), uploaded.type or "application/octet-stream",
                    position_title.strip(), manager.id,
                )
            except (httpx.HTTPError, RuntimeError, ValueError) as e:
                st.session_state["cv_result"] = None
                st.error(f"Conversion failed: {e}")

    result = st.session_state.get("cv_result")
    if result:
        st.success(result.get("message", "CV converted successfully"))
        c1, c2 = st.columns(2)
        c1.link_button("Download DOCX", url=result["docxUrl"])
        c2.link_button("Download PDF", url=result["pdfUrl"])
        st.caption("Links expire after 60 minutes.")


def render_layout() -> None:
    """Streamlit page layout; one sidebar entry per tool."""
    st.set_page_config(page_title="CloudMarc Calculators", layout="wide")
    st.title("CloudMarc Calculators")
    page = st.sidebar.radio("Tool", options=PAGES, key="page")
    st.divider()
    if page == "GP Calculator":
        _render_gp_page()
    elif page == "BDM Commission":
        _render_commission_page()
    elif page == "Working Days":
        _render_working_days_page()
    else:
        _render_cv_converter_page()


if __name__ == "__main__":
    render_layout()
