from __future__ import annotations

import math
import os
import sys
from dataclasses import asdict

import pandas as pd
import streamlit as st

# Ensure package import works on Streamlit Cloud when CWD != repo root
_THIS_DIR = os.path.dirname(__file__)
_REPO_ROOT = os.path.abspath(os.path.join(_THIS_DIR, "..", ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from rental_vs_index.core import plots
from rental_vs_index.core.advisory import (
    INPUT_BOUNDS,
    apply_overrides,
    build_defaults_prompt,
    build_insights_prompt,
    parse_defaults_response,
    split_overrides,
)
from rental_vs_index.core.amortization import MortgageTerms, summarize
from rental_vs_index.core.historical import RESEARCH_SUMMARY, historical_params, metric_help, milestones
from rental_vs_index.core.model import SimulationParams, SimulationResult, calculate_simulation
from rental_vs_index.core.report import build_pdf
from rental_vs_index.core.sensitivity import SWEEPABLE, default_range, sweep
from rental_vs_index.core.solver import BreakEvenAnalysis, analyze_break_even
from rental_vs_index.core.utils import dollar, percent
from config import (
    PURCHASE_PRICE,
    DOWN_PAYMENT_PERCENT,
    CLOSING_COSTS_PERCENT,
    MORTGAGE_RATE,
    AMORTIZATION_YEARS,
    MONTHLY_RENT,
    OPERATING_EXPENSE_PERCENT,
    UTILITIES_MONTHLY,
    VACANCY_RATE,
    PROPERTY_APPRECIATION,
    RENT_INCREASE,
    EXPENSE_INFLATION,
    INDEX_RETURN,
    configure_logging,
)


st.set_page_config(page_title="Rent vs. S&P 500", layout="wide")
configure_logging()


def default_params() -> SimulationParams:
    return SimulationParams(
        purchase_price=PURCHASE_PRICE,
        down_payment_percent=DOWN_PAYMENT_PERCENT,
        closing_costs_percent=CLOSING_COSTS_PERCENT,
        mortgage_rate=MORTGAGE_RATE,
        amortization_years=AMORTIZATION_YEARS,
        monthly_rent=MONTHLY_RENT,
        operating_expense_percent=OPERATING_EXPENSE_PERCENT,
        utilities_monthly=UTILITIES_MONTHLY,
        vacancy_rate=VACANCY_RATE,
        property_appreciation=PROPERTY_APPRECIATION,
        rent_increase=RENT_INCREASE,
        expense_inflation=EXPENSE_INFLATION,
        index_return=INDEX_RETURN,
    )


def load_into_session(params: SimulationParams) -> None:
    # number_input refuses mixed int/float values
    for name, value in asdict(params).items():
        st.session_state[name] = int(value) if name == "amortization_years" else float(value)


def set_session_value(name: str, value: float) -> None:
    st.session_state[name] = value


def init_session() -> None:
    if "purchase_price" not in st.session_state:
        load_into_session(default_params())


def sidebar_inputs() -> SimulationParams:
    st.sidebar.header("Configuration")
    st.sidebar.button(
        "Use historical defaults",
        help=str(RESEARCH_SUMMARY["title"]),
        on_click=load_into_session,
        args=(historical_params(),),
    )

    def bounded(label: str, key: str, step: float, fmt: str = "%0.1f"):
        low, high = INPUT_BOUNDS[key]
        return st.sidebar.number_input(label, min_value=low, max_value=high, step=step, format=fmt, key=key, help=metric_help(key))

    st.sidebar.subheader("Purchase")
    purchase_price = bounded("Purchase price ($)", "purchase_price", 5_000.0, "%0.0f")
    down_payment_percent = bounded("Down payment (%)", "down_payment_percent", 0.1)
    closing_costs_percent = bounded("Closing costs (% of price)", "closing_costs_percent", 0.1)

    st.sidebar.subheader("Mortgage")
    mortgage_rate = bounded("Mortgage rate (% annual)", "mortgage_rate", 0.05, "%0.2f")
    amortization_years = int(bounded("Amortization (years)", "amortization_years", 1, "%d"))

    st.sidebar.subheader("Rental")
    monthly_rent = bounded("Monthly rent ($)", "monthly_rent", 50.0, "%0.0f")
    vacancy_rate = bounded("Vacancy (%)", "vacancy_rate", 0.1)
    operating_expense_percent = bounded("Operating expenses (% of rent)", "operating_expense_percent", 0.1)
    utilities_monthly = bounded("Utilities ($/month)", "utilities_monthly", 10.0, "%0.0f")

    st.sidebar.subheader("Growth")
    property_appreciation = bounded("Property appreciation (% annual)", "property_appreciation", 0.1)
    rent_increase = bounded("Rent increase (% annual)", "rent_increase", 0.1)
    expense_inflation = bounded("Expense inflation (% annual)", "expense_inflation", 0.1)

    st.sidebar.subheader("S&P 500")
    index_return = bounded("Index return (% annual)", "index_return", 0.1)

    return SimulationParams(
        purchase_price=purchase_price,
        down_payment_percent=down_payment_percent,
        closing_costs_percent=closing_costs_percent,
        mortgage_rate=mortgage_rate,
        amortization_years=amortization_years,
        monthly_rent=monthly_rent,
        operating_expense_percent=operating_expense_percent,
        utilities_monthly=utilities_monthly,
        vacancy_rate=vacancy_rate,
        property_appreciation=property_appreciation,
        rent_increase=rent_increase,
        expense_inflation=expense_inflation,
        index_return=index_return,
    )


def kpi_card(label: str, value: str, help_text: str | None = None):
    st.metric(label, value, help=help_text)


def style_with_commas(df: pd.DataFrame):
    num_cols = df.select_dtypes(include=["number"]).columns
    if len(num_cols) == 0:
        return df
    return df.style.format({col: "{:,.0f}" for col in num_cols if col != "year"})


def render_summary(params: SimulationParams, result: SimulationResult):
    s = result.summary
    years = int(params.amortization_years)
    st.subheader(f"After {years} years")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kpi_card("Real estate net worth", dollar(s.total_re_net_worth), "Equity + reinvested surplus cash flow")
        st.caption(f"ROI: {percent(s.re_roi)}")
    with c2:
        kpi_card("S&P 500 net worth", dollar(s.total_index_net_worth), "Same cash invested in the index")
        st.caption(f"ROI: {percent(s.index_roi)}")
    with c3:
        kpi_card("Initial cash", dollar(s.initial_investment), "Down payment + closing costs")
    with c4:
        kpi_card("Total out of pocket", dollar(s.total_out_of_pocket), "Initial cash + every monthly deficit")

    if not result.data:
        return
    winner = "Real Estate" if s.total_re_net_worth > s.total_index_net_worth else "S&P 500"
    diff = abs(s.total_re_net_worth - s.total_index_net_worth)
    st.success(f"{winner} comes out ahead by {dollar(diff)}.")


def render_breakdown(params: SimulationParams, analysis: BreakEvenAnalysis):
    b = analysis.breakdown
    st.subheader("Monthly cash flow analysis (year 1)")
    st.caption("Using Canadian mortgage rules (semi-annual compounding)")
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Income**")
        st.write(f"Gross rent: {dollar(b.cash.gross_rent)}")
        st.write(f"Vacancy allowance ({percent(params.vacancy_rate)}): ({dollar(b.cash.vacancy_loss)})")
        st.write(f"Effective monthly income: **{dollar(b.cash.effective_rent)}**")
    with c2:
        st.markdown("**Expenses**")
        st.write(f"Mortgage payment: {dollar(b.mortgage_payment)}")
        st.caption(f"Interest {dollar(b.interest)} / principal {dollar(b.principal)} on a {dollar(b.loan_amount)} loan")
        st.write(f"Operating expenses ({percent(params.operating_expense_percent)} of rent): {dollar(b.cash.operating_expenses)}")
        st.write(f"Utilities: {dollar(b.cash.fixed_expenses)}")
        st.write(f"Total: **{dollar(b.cash.total_outflow)}**")

    kpi_card("Monthly cash flow", dollar(b.cash_flow, cents=True))
    st.caption(f"{dollar(b.annual_cash_flow)} / year")

    st.markdown("**Break-even solver**")
    c3, c4 = st.columns(2)
    with c3:
        if analysis.rent.solvable:
            st.write(f"Rent needed for zero cash flow: **{dollar(analysis.rent.value)}**")
            st.button(
                "Apply break-even rent",
                on_click=set_session_value,
                args=("monthly_rent", float(math.ceil(analysis.rent.value))),
            )
        else:
            st.warning("Vacancy and operating expenses consume the whole rent; no break-even rent exists.")
    with c4:
        if analysis.down_payment_percent.solvable:
            st.write(f"Down payment needed for zero cash flow: **{percent(analysis.down_payment_percent.value)}**")
            st.button(
                "Apply break-even down payment",
                on_click=set_session_value,
                args=("down_payment_percent", float(round(analysis.down_payment_percent.value, 1))),
            )
        else:
            st.warning("No down payment can make this property cash-flow neutral.")


def render_graphs(result: SimulationResult):
    yearly = result.to_frame()
    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(plots.net_worth_curve(yearly), use_container_width=True)
    with c2:
        st.plotly_chart(plots.cashflow_bars(yearly), use_container_width=True)


def render_tables(params: SimulationParams, result: SimulationResult):
    view_monthly = st.toggle("Show monthly amortization", value=False)
    yearly = result.to_frame()
    st.markdown("Projection (yearly)")
    st.dataframe(style_with_commas(yearly), use_container_width=True)
    st.download_button(
        "Export projection CSV",
        data=yearly.to_csv(index=False).encode("utf-8"),
        file_name="projection.csv",
        mime="text/csv",
    )

    amort = summarize(MortgageTerms.from_params(params))
    schedule = amort.schedule_monthly if view_monthly else amort.schedule_yearly
    st.markdown("Amortization (monthly)" if view_monthly else "Amortization (yearly)")
    st.dataframe(style_with_commas(schedule), use_container_width=True)
    st.download_button(
        "Export amortization CSV",
        data=schedule.to_csv(index=False).encode("utf-8"),
        file_name="amortization_monthly.csv" if view_monthly else "amortization_yearly.csv",
        mime="text/csv",
    )


def render_sensitivity(params: SimulationParams):
    st.subheader("Sensitivity of final net worth")
    names = list(SWEEPABLE)
    c1, c2, c3 = st.columns(3)
    for col, name in zip([c1, c2, c3] * 3, names):
        with col:
            label = name.replace("_", " ").capitalize() + " (%)"
            df = sweep(params, name, default_range(params, name))
            st.plotly_chart(plots.sensitivity_curve(df, label), use_container_width=True)


def render_advisory(params: SimulationParams, result: SimulationResult):
    st.subheader("Market insights")
    st.caption("Send this prompt to a text-generation service of your choice.")
    st.code(build_insights_prompt(params, result), language="markdown")

    st.subheader("Realistic defaults")
    st.code(build_defaults_prompt(), language="markdown")
    answer = st.text_area("Paste the JSON answer here", key="advisory_answer")

    def _apply_answer():
        overrides = parse_defaults_response(st.session_state["advisory_answer"])
        st.session_state["advisory_error"] = overrides is None
        st.session_state["advisory_dropped"] = {}
        if overrides is not None:
            kept, dropped = split_overrides(overrides)
            st.session_state["advisory_dropped"] = dropped
            load_into_session(apply_overrides(params, kept))

    st.button("Apply defaults", on_click=_apply_answer, disabled=not answer)
    if st.session_state.get("advisory_error"):
        st.error("Could not read a JSON object from that answer.")
    dropped = st.session_state.get("advisory_dropped") or {}
    if dropped:
        details = ", ".join(f"{name}={value:g}" for name, value in sorted(dropped.items()))
        st.warning(f"Ignored out-of-range values: {details}")


def render_history():
    st.subheader(str(RESEARCH_SUMMARY["title"]))
    for finding in RESEARCH_SUMMARY["key_findings"]:  # type: ignore[union-attr]
        st.markdown(f"**{finding['label']}**: {finding['value']}. {finding['detail']}")
    st.markdown("**Milestones**")
    st.markdown("\n".join(f"- {m}" for m in milestones()))
    st.markdown("**Sources**")
    st.markdown("\n".join(f"- [{name}]({url})" for name, url in RESEARCH_SUMMARY["sources"]))  # type: ignore[union-attr]


def render_report(params: SimulationParams, result: SimulationResult):
    st.subheader("Report")
    if st.button("Generate PDF"):
        st.download_button("Download PDF", data=build_pdf(params, result), file_name="report.pdf", mime="application/pdf")


def main():
    st.title("Rent vs. S&P 500")
    init_session()
    params = sidebar_inputs()
    result = calculate_simulation(params)
    analysis = analyze_break_even(params)

    render_summary(params, result)
    tabs = st.tabs(["Charts", "Cash flow", "Tables", "Sensitivity", "Insights", "History"])
    with tabs[0]:
        render_graphs(result)
    with tabs[1]:
        render_breakdown(params, analysis)
    with tabs[2]:
        render_tables(params, result)
    with tabs[3]:
        render_sensitivity(params)
    with tabs[4]:
        render_advisory(params, result)
    with tabs[5]:
        render_history()

    st.divider()
    render_report(params, result)


if __name__ == "__main__":
    main()
