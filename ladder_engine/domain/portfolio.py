"""Portfolio snapshot - summaries, totals and cash-flow views for one `now`"""

import time
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from ladder_engine.config import settings
from ladder_engine.domain.cashflow import build_monthly_allowance
from ladder_engine.domain.models import (
    Bank,
    CurrentMonthBreakdown,
    Deposit,
    DepositSummary,
    MonthlyAllowance,
    NextMaturity,
    PortfolioSnapshot,
)
from ladder_engine.domain.summaries import build_deposit_summary
from ladder_engine.observability.logging import log_portfolio_snapshot
from ladder_engine.utils.date_utils import month_key, to_date


def resolve_bank(deposit: Deposit, banks_by_id: Dict[str, Bank]) -> Bank:
    """
    Look up the deposit's bank, synthesizing one when it is not in the catalog.

    Free-text bank names are stored in bank_id, so the id doubles as the name.
    """
    bank = banks_by_id.get(deposit.bank_id)
    if bank is not None:
        return bank
    tax_rate = deposit.tax_rate_override
    if tax_rate is None:
        tax_rate = settings.default_tax_rate
    return Bank(id=deposit.bank_id, name=deposit.bank_id, tax_rate=tax_rate)


def current_month_breakdown(current: Optional[MonthlyAllowance]) -> CurrentMonthBreakdown:
    """Split this month's bucket into pending (matured) and settled income"""
    if current is None:
        return CurrentMonthBreakdown(net=0.0, pending_net=0.0, settled_net=0.0)
    pending_net = sum(e.amount_net for e in current.entries if e.status == "matured")
    settled_net = sum(e.amount_net for e in current.entries if e.status == "settled")
    return CurrentMonthBreakdown(net=current.net, pending_net=pending_net, settled_net=settled_net)


def find_next_maturity(summaries: Sequence[DepositSummary], today: date) -> Optional[NextMaturity]:
    """Earliest future maturity among active deposits"""
    candidates = [
        s for s in summaries
        if s.status == "active" and s.maturity_date is not None and s.maturity_date > today
    ]
    if not candidates:
        return None

    upcoming = min(candidates, key=lambda s: s.maturity_date)
    return NextMaturity(
        deposit_id=upcoming.deposit.id,
        name=upcoming.deposit.name,
        bank_name=upcoming.bank.name,
        maturity_date=upcoming.maturity_date,
        net_proceeds=upcoming.net_total,
    )


def build_portfolio(
    deposits: Sequence[Deposit], banks: Sequence[Bank], now: date | datetime
) -> PortfolioSnapshot:
    """
    Main entry point: summarize every deposit and project cash flows as of `now`.

    - monthly_allowance excludes settled deposits (their cash is already in hand)
    - current_month_full and current_month_breakdown include every deposit, so
      settled payouts still count as this month's income
    """
    started = time.perf_counter()
    today = to_date(now)
    banks_by_id = {bank.id: bank for bank in banks}

    summaries: List[DepositSummary] = [
        build_deposit_summary(deposit, resolve_bank(deposit, banks_by_id), now=today)
        for deposit in deposits
    ]
    open_summaries = [s for s in summaries if s.status != "settled"]

    total_principal = sum(s.deposit.principal for s in open_summaries)
    monthly_allowance = build_monthly_allowance(open_summaries, today)

    this_month = month_key(today)
    current_month_full = next(
        (m for m in build_monthly_allowance(summaries, today) if m.month_key == this_month),
        None,
    )

    snapshot = PortfolioSnapshot(
        summaries=summaries,
        total_principal=total_principal,
        current_month_breakdown=current_month_breakdown(current_month_full),
        next_maturity=find_next_maturity(summaries, today),
        monthly_allowance=monthly_allowance,
        current_month_full=current_month_full,
    )

    log_portfolio_snapshot(
        as_of=today.isoformat(),
        deposit_count=len(deposits),
        month_count=len(monthly_allowance),
        total_principal=total_principal,
        duration_ms=(time.perf_counter() - started) * 1000,
    )
    return snapshot
