import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date
from uuid import uuid4

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from networth.aggregation import available_years, dashboard_summary, monthly_overview, sort_by_date_desc
from networth.config import convert, load_settings
from networth.domain import ASSET_TYPES, EXPENSE_CATEGORIES, MONTHLY, is_iso_date
from networth.functional import safe_asset, validate_asset, validate_projection, validate_transaction
from networth.history import (
    asset_value_changes,
    breakdown_for,
    daily_asset_values,
    net_worth_history,
    transaction_history,
)
from networth.projection import project_net_worth
from networth.recurrence import by_category
from networth.services import default_report_service
from networth.transforms import (
    add_contribution,
    add_record,
    create_asset,
    create_transaction,
    delete_record,
    load_seed,
    replace_record,
    total_net_worth,
    update_asset_value,
    update_transaction,
)

settings = load_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Net Worth Tracker", layout="wide")

if "assets" not in st.session_state:
    assets, income, expenses = load_seed(settings.seed_path)
    st.session_state.assets = assets
    st.session_state.income = income
    st.session_state.expenses = expenses

CUR = settings.base_currency
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def money(x) -> str:
    return f"{x:,.2f} {CUR}"


def tx_to_df(records) -> pd.DataFrame:
    rows = [
        {
            "date": t.date,
            "description": t.description,
            "amount": t.amount,
            "category": t.category or "",
            "recurring": (
                f"{t.frequency} until {t.end_date}" if t.is_recurring and t.end_date
                else t.frequency if t.is_recurring
                else "One-Off"
            ),
        }
        for t in records
    ]
    return pd.DataFrame(rows, columns=["date", "description", "amount", "category", "recurring"])


def as_date(value):
    return date.fromisoformat(value) if is_iso_date(value) else None


def show_errors(result) -> bool:
    if result.is_left():
        st.error(f"❌ {result.get_error()['message']}")
        return True
    return False


menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "💼 Assets", "🧾 Income & Expenses", "📅 Monthly Overview", "📈 Net Worth History", "🔮 Projections"],
)

if menu == "🏠 Dashboard":
    summary = dashboard_summary(
        st.session_state.assets,
        st.session_state.income,
        st.session_state.expenses,
        recent=settings.recent_transactions,
    )
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Net Worth", money(summary.total_net_worth))
    k2.metric("Income this month", money(summary.month.total_income))
    k3.metric("Expenses this month", money(summary.month.total_expenses))
    k4.metric("Balance", money(summary.month.balance))

    col_pie, col_recent = st.columns(2)
    with col_pie:
        st.subheader("Expense categories")
        if summary.month.by_category:
            df_cat = pd.DataFrame(summary.month.by_category, columns=["Category", "Amount"])
            st.plotly_chart(px.pie(df_cat, values="Amount", names="Category"), use_container_width=True)
        else:
            st.info("No expenses for this month to categorize.")
    with col_recent:
        st.subheader("Recent transactions")
        if summary.recent:
            for t in summary.recent:
                sign = "-" if t.is_expense else "+"
                st.write(f"**{t.description}** · {t.date} {t.category or ''} · {sign}{money(t.amount or 0)}")
        else:
            st.info("No recent transactions.")

elif menu == "💼 Assets":
    st.title("💼 Assets")
    total = total_net_worth(st.session_state.assets)
    st.metric(f"Total Net Worth ({CUR})", money(total))
    st.caption(" · ".join(f"{c}: {convert(total, c, settings):,.2f}" for c in settings.exchange_rates))

    with st.expander("➕ Add new asset"):
        with st.form("add_asset", clear_on_submit=True):
            name = st.text_input("Name")
            asset_type = st.selectbox("Type", ASSET_TYPES)
            initial_value = st.number_input("Initial value", min_value=0.0, step=100.0)
            initial_date = st.date_input("Valuation date", value=date.today())
            if st.form_submit_button("Add asset"):
                asset = create_asset(str(uuid4()), name, asset_type, initial_value, initial_date.isoformat())
                result = validate_asset(asset)
                if not show_errors(result):
                    st.session_state.assets = add_record(st.session_state.assets, asset)
                    logger.info("Added asset %s (%s)", asset.name, asset.type)
                    st.rerun()

    for asset in st.session_state.assets:
        with st.container(border=True):
            left, right = st.columns([3, 2])
            with left:
                st.subheader(asset.name)
                st.caption(asset.type)
                st.write(f"Current value: **{money(asset.current_value)}**")
                st.write(f"Initial value: {money(asset.initial_value or 0)}")
                st.write(f"Contributions: {money(asset.total_contributions)}")
                st.write(f"Interest movement: {asset.interest_movement:+,.2f} {CUR}")
            with right:
                spark = daily_asset_values(asset)
                if len(spark) > 1:
                    fig = go.Figure(go.Scatter(x=[d for d, _ in spark], y=[v for _, v in spark], mode="lines"))
                    fig.update_layout(height=120, margin=dict(t=5, b=5, l=5, r=5), xaxis_visible=False, yaxis_visible=False)
                    st.plotly_chart(fig, use_container_width=True, key=f"spark_{asset.id}")

            c1, c2, c3 = st.columns(3)
            with c1:
                with st.popover("Update value"):
                    new_value = st.number_input("New value", min_value=0.0, value=asset.current_value, key=f"val_{asset.id}")
                    if st.button("Save", key=f"save_{asset.id}"):
                        updated = safe_asset(st.session_state.assets, asset.id).map(lambda a: update_asset_value(a, new_value))
                        if updated.is_none():
                            st.error("❌ Asset no longer exists")
                        else:
                            st.session_state.assets = replace_record(st.session_state.assets, updated.get_or_else(asset))
                            st.rerun()
            with c2:
                with st.popover("Add contribution"):
                    amount = st.number_input("Amount", min_value=0.01, value=100.0, key=f"contrib_{asset.id}")
                    on_date = st.date_input("Date", value=date.today(), key=f"contrib_date_{asset.id}")
                    if st.button("Add", key=f"add_contrib_{asset.id}"):
                        updated = safe_asset(st.session_state.assets, asset.id).map(lambda a: add_contribution(a, amount, on_date.isoformat()))
                        if updated.is_none():
                            st.error("❌ Asset no longer exists")
                        else:
                            st.session_state.assets = replace_record(st.session_state.assets, updated.get_or_else(asset))
                            st.rerun()
            with c3:
                if st.button("🗑 Delete", key=f"del_{asset.id}"):
                    st.session_state.assets = delete_record(st.session_state.assets, asset.id)
                    logger.info("Deleted asset %s", asset.id)
                    st.rerun()

            with st.expander("Value history"):
                changes = asset_value_changes(asset)
                st.table(pd.DataFrame(
                    [{"Date": c.date, "Value": c.value, "Change": c.change, "Type": c.type or ""} for c in changes]
                ))

elif menu == "🧾 Income & Expenses":
    st.title("🧾 Income & Expenses")
    col_income, col_expense = st.columns(2)

    def transaction_form(key: str, is_expense: bool):
        with st.form(key, clear_on_submit=True):
            amount = st.number_input("Amount", min_value=0.0, step=10.0)
            description = st.text_input("Description")
            category = st.selectbox("Category", EXPENSE_CATEGORIES) if is_expense else None
            start = st.date_input("Date", value=date.today())
            is_recurring = st.checkbox("Recurring (monthly)")
            end = st.date_input("End date (optional)", value=None)
            if st.form_submit_button("Add"):
                t = create_transaction(
                    str(uuid4()),
                    amount,
                    description,
                    start.isoformat(),
                    is_recurring=is_recurring,
                    frequency=MONTHLY if is_recurring else "",
                    end_date=end.isoformat() if end else "",
                    category=category,
                )
                if not show_errors(validate_transaction(t)):
                    return t
        return None

    def transaction_list(records, state_key: str, is_expense: bool):
        for t in sort_by_date_desc(records):
            with st.expander(f"{t.date} · {t.description} · {money(t.amount or 0)}"):
                with st.form(f"edit_{t.id}"):
                    new_amount = st.number_input("Amount", min_value=0.0, value=float(t.amount or 0))
                    new_description = st.text_input("Description", value=t.description)
                    new_category = (
                        st.selectbox(
                            "Category",
                            EXPENSE_CATEGORIES,
                            index=EXPENSE_CATEGORIES.index(t.category) if t.category in EXPENSE_CATEGORIES else 0,
                        )
                        if is_expense else None
                    )
                    new_start = st.date_input("Date", value=as_date(t.date) or date.today())
                    new_recurring = st.checkbox("Recurring (monthly)", value=t.is_recurring)
                    new_end = st.date_input("End date (optional)", value=as_date(t.end_date))
                    if st.form_submit_button("Save changes"):
                        updated = update_transaction(
                            t,
                            amount=new_amount,
                            description=new_description,
                            category=new_category,
                            date=new_start.isoformat(),
                            is_recurring=new_recurring,
                            frequency=MONTHLY if new_recurring else "",
                            end_date=new_end.isoformat() if new_recurring and new_end else "",
                        )
                        if not show_errors(validate_transaction(updated)):
                            st.session_state[state_key] = replace_record(st.session_state[state_key], updated)
                            logger.info("Updated %s record %s", state_key, t.id)
                            st.rerun()
                if st.button("🗑 Delete", key=f"deltx_{t.id}"):
                    st.session_state[state_key] = delete_record(st.session_state[state_key], t.id)
                    st.rerun()
                st.dataframe(pd.DataFrame(
                    [
                        {"When": h.timestamp, "Change": h.change_type, "Amount": h.amount,
                         "Description": h.description, "Category": h.category or "",
                         "Date": h.date, "Recurring": h.is_recurring, "End": h.end_date}
                        for h in transaction_history(t)
                    ]
                ), use_container_width=True)

    with col_income:
        st.subheader("Income")
        new_income = transaction_form("add_income", is_expense=False)
        if new_income:
            st.session_state.income = add_record(st.session_state.income, new_income)
            st.rerun()
        transaction_list(st.session_state.income, "income", is_expense=False)

    with col_expense:
        st.subheader("Expenses")
        new_expense = transaction_form("add_expense", is_expense=True)
        if new_expense:
            st.session_state.expenses = add_record(st.session_state.expenses, new_expense)
            st.rerun()
        shown = st.selectbox("Show", ["All", *EXPENSE_CATEGORIES], key="expense_filter")
        expenses = st.session_state.expenses if shown == "All" else filter(by_category(shown), st.session_state.expenses)
        transaction_list(expenses, "expenses", is_expense=True)

elif menu == "📅 Monthly Overview":
    st.title("📅 Monthly Overview")
    today = date.today()
    years = available_years(st.session_state.income, st.session_state.expenses)
    c1, c2 = st.columns(2)
    month = c1.selectbox("Month", range(1, 13), index=today.month - 1, format_func=lambda m: MONTH_NAMES[m - 1])
    year = c2.selectbox("Year", years, index=years.index(today.year))

    overview = monthly_overview(st.session_state.income, st.session_state.expenses, year, month)
    k1, k2, k3 = st.columns(3)
    k1.metric("Total income", money(overview.total_income))
    k2.metric("Total expenses", money(overview.total_expenses))
    k3.metric("Balance", money(overview.balance))

    left, right = st.columns(2)
    with left:
        st.subheader("Income")
        st.table(tx_to_df(overview.income))
        st.subheader("Expenses")
        st.table(tx_to_df(overview.expenses))
    with right:
        st.subheader("By category")
        st.table(pd.DataFrame(overview.by_category, columns=["Category", "Amount"]))
        st.subheader("By type")
        st.table(pd.DataFrame(overview.by_type, columns=["Type", "Amount"]))

    report = default_report_service().monthly_report(
        year, month, st.session_state.income, st.session_state.expenses
    )
    warnings = [m for v in report["validation"] for m in v["messages"]]
    if warnings:
        with st.expander(f"⚠️ {len(warnings)} data warning(s)"):
            for w in warnings:
                st.write(w)

elif menu == "📈 Net Worth History":
    st.title("📈 Net Worth History")
    history = net_worth_history(st.session_state.assets)
    if not history.points:
        st.info("No asset history recorded yet.")
    else:
        df_hist = pd.DataFrame(
            [{"date": p.date, "net_worth": p.total_net_worth} for p in history.points]
        )
        fig = px.line(df_hist, x="date", y="net_worth", markers=True, line_shape="hv")
        st.plotly_chart(fig, use_container_width=True)

        selected = st.select_slider("Breakdown on", options=df_hist["date"].tolist(), value=df_hist["date"].iloc[-1])
        shares = breakdown_for(history, selected, st.session_state.assets)
        st.table(pd.DataFrame([{"Asset": s.name, "Type": s.type, "Value": s.value} for s in shares]))

elif menu == "🔮 Projections":
    st.title("🔮 Net Worth Projections")
    c1, c2, c3 = st.columns(3)
    rate = c1.number_input("Annual growth rate (%)", min_value=0.0, value=settings.default_growth_rate, step=0.5)
    contribution = c2.number_input(
        "Monthly contribution", min_value=0.0, value=settings.default_monthly_contribution, step=50.0
    )
    years = c3.number_input("Years", min_value=1, max_value=50, value=settings.default_projection_years, step=1)

    checked = validate_projection(int(years), rate, contribution)
    if not show_errors(checked):
        points = project_net_worth(total_net_worth(st.session_state.assets), rate, contribution, int(years))
        df_proj = pd.DataFrame([{"year": p.year, "net_worth": p.projected_net_worth} for p in points])
        st.plotly_chart(px.line(df_proj, x="year", y="net_worth", markers=True), use_container_width=True)
        st.table(df_proj)
