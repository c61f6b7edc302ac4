"""
Streamlit Frontend for Pocket Ledger

This is the dashboard users interact with daily.

DESIGN PRINCIPLES:
1. One month on screen at a time
2. Clear error messages in simple language
3. Deleting always asks for confirmation
4. Premium features show an upgrade prompt instead of failing
5. No hidden actions

The UI only renders and collects input; every rule lives in
pocket_ledger (validator, aggregation, gating).
"""

import asyncio
from datetime import date
from uuid import UUID

import streamlit as st

from pocket_ledger.config import get_settings, validate_all_settings
from pocket_ledger.models import (
    MONTHS,
    Denied,
    MonthlyReport,
    TransactionDraft,
    TransactionType,
    suggested_categories,
    year_options,
)
from pocket_ledger.orchestrator import LedgerFlow, SessionFlow, create_app_components
from pocket_ledger.reports import format_currency, format_percentage
from pocket_ledger.validation import TransactionValidationError


# Page configuration
st.set_page_config(
    page_title="Pocket Ledger",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .pro-badge {
        font-size: 0.7em;
        background-color: #fef9c3;
        color: #a16207;
        padding: 2px 8px;
        border-radius: 10px;
        border: 1px solid #fde68a;
        font-weight: bold;
    }
    .negative {
        color: #dc2626;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> tuple[LedgerFlow, SessionFlow]:
    """Get or create application components (cached)."""
    status = validate_all_settings()
    ledger_flow, session_flow = create_app_components(use_storage=status["storage"])
    if not status["storage"]:
        st.warning("Storage is misconfigured; changes will not be saved.")
        run_async(ledger_flow.audit_logger.log_error(
            error_type="configuration",
            error_message=status["storage_error"],
        ))
    run_async(ledger_flow.load())
    run_async(session_flow.restore())
    return ledger_flow, session_flow


def money(amount) -> str:
    return format_currency(amount, symbol=get_settings().app.currency_symbol)


def main():
    """Main application entry point."""
    ledger_flow, session_flow = get_components()

    if "show_upgrade" not in st.session_state:
        st.session_state.show_upgrade = False
    if "pending_delete" not in st.session_state:
        st.session_state.pending_delete = None

    if session_flow.current_user is None:
        render_login_page(session_flow)
        return

    month, year = render_sidebar(ledger_flow, session_flow)

    # Messages set just before a rerun are shown once, on the next run
    notice = st.session_state.pop("notice", None)
    if notice:
        st.success(notice)

    if st.session_state.show_upgrade:
        render_upgrade_prompt(session_flow)

    report = ledger_flow.monthly_report(month, year)

    st.title(f"💰 {report.period.label}")
    render_summary(report)
    render_breakdown(report)

    col1, col2 = st.columns([1, 2])
    with col1:
        render_entry_form(ledger_flow)
    with col2:
        render_history(ledger_flow, report)


def render_login_page(session_flow: SessionFlow):
    """Render the (mock) sign-in page."""
    st.title("💰 Pocket Ledger")
    st.markdown("Track your income and expenses, month by month.")
    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Sign in with Google", type="primary"):
            run_async(session_flow.login("google"))
            st.rerun()
    with col2:
        if st.button("Sign in with Email"):
            run_async(session_flow.login("email"))
            st.rerun()


def render_sidebar(ledger_flow: LedgerFlow, session_flow: SessionFlow) -> tuple[int, int]:
    """Render the sidebar and return the selected (month, year)."""
    user = session_flow.current_user
    today = date.today()

    st.sidebar.title("💰 Pocket Ledger")
    if user.avatar:
        st.sidebar.image(user.avatar, width=48)
    st.sidebar.markdown(f"**{user.name}**  \n{user.email}")

    if user.is_pro:
        st.sidebar.markdown('<span class="pro-badge">👑 PRO MEMBER</span>', unsafe_allow_html=True)
    elif st.sidebar.button("Upgrade to Pro"):
        st.session_state.show_upgrade = True

    st.sidebar.markdown("---")

    month = st.sidebar.selectbox(
        "Month",
        options=list(range(12)),
        index=today.month - 1,
        format_func=lambda m: MONTHS[m],
    )
    years = year_options(today, window=get_settings().app.year_window)
    year = st.sidebar.selectbox(
        "Year",
        options=years,
        index=years.index(today.year),
    )

    st.sidebar.markdown("---")

    if st.sidebar.button("☁️ Sync to Cloud" + ("" if user.is_pro else " 👑")):
        with st.spinner("Syncing..."):
            result = run_async(ledger_flow.sync())
        if isinstance(result, Denied):
            st.session_state.show_upgrade = True
        else:
            st.sidebar.success(result.message)

    if st.sidebar.button("Sign out"):
        run_async(session_flow.logout())
        st.rerun()

    return month, year


def render_upgrade_prompt(session_flow: SessionFlow):
    """Render the upgrade offer shown when a pro feature is refused."""
    with st.container(border=True):
        st.subheader("👑 Upgrade to Pro")
        st.markdown(
            """
            - Export your reports as CSV
            - Sync your data to the cloud
            """
        )
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Subscribe", type="primary"):
                run_async(session_flow.subscribe())
                st.session_state.show_upgrade = False
                st.session_state.notice = "Thank you! You are now a PRO member."
                st.rerun()
        with col2:
            if st.button("Maybe later"):
                st.session_state.show_upgrade = False
                st.rerun()


def render_summary(report: MonthlyReport):
    """Render the income / expense / balance cards."""
    summary = report.summary
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", money(summary.total_income))
    col2.metric("Total Expense", money(summary.total_expense))
    with col3:
        if summary.is_negative:
            st.markdown("Remaining Balance")
            st.markdown(
                f'<h2 class="negative">{money(summary.balance)}</h2>',
                unsafe_allow_html=True,
            )
        else:
            st.metric("Remaining Balance", money(summary.balance))


def render_breakdown(report: MonthlyReport):
    """Render expense share per category as bars."""
    st.subheader("📊 Spending by Category")
    if not report.breakdown:
        st.info("No expenses recorded this month.")
        return

    for item in report.breakdown:
        st.markdown(
            f"**{item.category}**: {money(item.amount)} ({format_percentage(item.percentage)})"
        )
        st.progress(min(float(item.percentage) / 100, 1.0))


def render_entry_form(ledger_flow: LedgerFlow):
    """Render the new transaction form."""
    st.subheader("➕ Add Transaction")

    transaction_type = st.radio(
        "Type",
        options=[TransactionType.EXPENSE, TransactionType.INCOME],
        format_func=lambda t: t.value,
        horizontal=True,
    )

    with st.form("new_transaction", clear_on_submit=True):
        entry_date = st.date_input("Date", value=date.today())
        category = st.selectbox(
            "Category",
            options=suggested_categories(transaction_type),
            index=None,
            placeholder="Choose a category",
        )
        amount = st.text_input("Amount", placeholder="0")
        note = st.text_input("Note (optional)", placeholder="Extra details...")
        submitted = st.form_submit_button("Save Transaction", type="primary")

    if submitted:
        draft = TransactionDraft(
            date=entry_date,
            type=transaction_type,
            category=category,
            amount=amount,
            note=note,
        )
        try:
            _, result = run_async(ledger_flow.add_transaction(draft))
        except TransactionValidationError as e:
            st.error(str(e))
            return
        for warning in result.warnings:
            st.warning(warning)
        st.success("Transaction saved.")
        st.rerun()


def render_history(ledger_flow: LedgerFlow, report: MonthlyReport):
    """Render the month's transactions with export and delete."""
    header_col, export_col = st.columns([3, 1])
    with header_col:
        st.subheader("🧾 Transaction History")
    with export_col:
        if st.button("⬇️ Export CSV"):
            result = run_async(
                ledger_flow.export_csv(report.period.month, report.period.year)
            )
            if isinstance(result, Denied):
                st.session_state.show_upgrade = True
                st.rerun()
            else:
                st.download_button(
                    "Download",
                    data=result.data,
                    file_name=result.filename,
                    mime=result.media_type,
                )

    if report.is_empty:
        st.info("No transactions this month yet.")
        return

    for t in report.transactions:
        col1, col2, col3, col4 = st.columns([2, 3, 2, 1])
        col1.markdown(t.date.strftime("%d %b %Y"))
        col2.markdown(f"**{t.category}**  \n{t.note}" if t.note else f"**{t.category}**")
        sign = "+" if t.is_income else "-"
        col3.markdown(f"{sign} {money(t.amount)}")
        if col4.button("🗑️", key=f"delete_{t.id}"):
            st.session_state.pending_delete = str(t.id)
            st.rerun()

        if st.session_state.pending_delete == str(t.id):
            st.warning("Are you sure you want to delete this transaction?")
            yes_col, no_col = st.columns(2)
            if yes_col.button("Delete", key=f"confirm_{t.id}", type="primary"):
                run_async(ledger_flow.delete_transaction(UUID(st.session_state.pending_delete)))
                st.session_state.pending_delete = None
                st.rerun()
            if no_col.button("Cancel", key=f"cancel_{t.id}"):
                st.session_state.pending_delete = None
                st.rerun()


if __name__ == "__main__":
    main()
