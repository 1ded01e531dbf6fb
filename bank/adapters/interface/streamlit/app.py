"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from bank.domain.errors import BankError
from bank.domain.models.accounts import Account
from bank.domain.models.transactions import Transaction, TransactionKind
from bank.domain.services.ledger import running_balances
from bank.infrastructure.container import BankServices, build_services


@st.cache_resource(show_spinner=False)
def _load_services() -> BankServices:
    """Build the services once per Streamlit server process."""
    return build_services()


def _fetch_accounts(services: BankServices) -> Sequence[Account]:
    """Fetch accounts ordered by name."""
    return services.list_accounts.execute()


def _fetch_history(
    services: BankServices,
    account_id: str,
) -> Sequence[Transaction]:
    """Fetch an account's transactions, newest first."""
    return services.list_transactions.execute(account_id)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    return f"{value:,.2f} {currency_code}"


def _prepare_balance_chart_data(
    history: Sequence[Transaction],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Return Altair-ready rows with the balance after each transaction."""
    return [
        {
            "created_at": transaction.created_at.isoformat(),
            "balance": float(balance),
            "type": transaction.kind.value,
            "balance_label": _format_currency(balance, currency_code),
        }
        for transaction, balance in running_balances(history)
    ]


def _render_accounts(accounts: Sequence[Account]) -> None:
    """Render the accounts table."""
    st.subheader("Accounts")
    data = [
        {
            "Name": account.name,
            "Balance": _format_currency(account.balance, account.currency),
            "Currency": account.currency,
            "ID": account.id,
        }
        for account in accounts
    ]
    st.dataframe(data, width="stretch", hide_index=True)


def _render_history(
    history: Sequence[Transaction],
    currency_code: str,
) -> None:
    """Render the transaction table of the selected account."""
    st.subheader("History")
    if not history:
        st.info("No transactions recorded for this account.")
        return
    data = [
        {
            "Date": transaction.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            "Type": transaction.kind.value,
            "Amount": _format_currency(transaction.amount, currency_code),
            "ID": transaction.id,
        }
        for transaction in history
    ]
    st.dataframe(data, width="stretch", hide_index=True)


def _render_balance_chart(
    history: Sequence[Transaction],
    currency_code: str,
    chart_height: int = 300,
) -> None:
    """Render the running balance as a step line.

    Args:
        history: Transactions of one account in any order.
        currency_code: Currency used for tooltips.
        chart_height: Height of the chart canvas.
    """
    if not history:
        return
    data = _prepare_balance_chart_data(history, currency_code)
    chart = alt.Chart(alt.Data(values=data)).mark_line(
        interpolate="step-after",
        point=True,
    ).encode(
        x=alt.X("created_at:T", title=None),
        y=alt.Y("balance:Q", title=f"Balance ({currency_code})"),
        tooltip=[
            alt.Tooltip("created_at:T"),
            alt.Tooltip("type:N"),
            alt.Tooltip("balance_label:N"),
        ],
    ).properties(
        height=chart_height,
    )
    st.subheader("Running balance")
    st.altair_chart(chart, width="stretch")


def _render_posting_form(services: BankServices, account: Account) -> None:
    """Render a deposit/withdrawal form posting through the workflow."""
    with st.form("post_transaction", clear_on_submit=True):
        kind = st.selectbox(
            "Type",
            [kind.value for kind in TransactionKind],
        )
        amount = st.number_input(
            f"Amount ({account.currency})",
            min_value=0.0,
            step=0.01,
            format="%.2f",
        )
        submitted = st.form_submit_button("Post")
    if not submitted:
        return
    try:
        transaction = services.post_transaction.execute(
            account.id,
            Decimal(str(amount)).quantize(Decimal("0.01")),
            kind,
        )
    except BankError as exc:
        st.error(str(exc))
        return
    st.success(
        f"Posted {transaction.kind.value} of "
        f"{_format_currency(transaction.amount, account.currency)}"
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Bank Dashboard", layout="wide")
    st.title("Bank Dashboard")

    services = _load_services()
    accounts = _fetch_accounts(services)
    if not accounts:
        st.warning("No accounts found. Create one through the API first.")
        return

    _render_accounts(accounts)

    names = {account.id: account.name for account in accounts}
    selected_id = st.sidebar.selectbox(
        "Account",
        list(names),
        format_func=lambda account_id: names[account_id],
    )
    account = next(
        account for account in accounts if account.id == selected_id
    )
    balance_col, currency_col = st.columns(2)
    balance_col.metric(
        "Balance",
        _format_currency(account.balance, account.currency),
    )
    currency_col.metric("Currency", account.currency)

    _render_posting_form(services, account)
    history = _fetch_history(services, account.id)
    _render_balance_chart(history, account.currency)
    _render_history(history, account.currency)


if __name__ == "__main__":  # pragma: no cover
    main()
