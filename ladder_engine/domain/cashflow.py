"""Cash-flow projector - month-bucketed net receipts across a portfolio"""

import math
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from ladder_engine.domain.models import AllowanceEntry, DepositSummary, MonthlyAllowance
from ladder_engine.utils.date_utils import (
    add_days,
    add_months,
    add_term_months,
    format_month_label,
    month_key,
    to_date,
)

PayoutEvent = Tuple[date, AllowanceEntry]

# Rolling window for open-ended deposits
OPEN_ENDED_PROJECTION_MONTHS = 12


def _months_between(earlier: date, later: date) -> int:
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def open_ended_payout_dates(start_date: date, today: date) -> List[date]:
    """
    Rolling monthly payouts for a deposit with no maturity.

    Payouts fall on monthly anniversaries of the start date (day of month kept,
    clamped in short months). The first one is the earliest anniversary after
    the start date that lands in the current month or later:

        today 2026-03-15, opened 2026-02-10 -> 2026-03-10, 2026-04-10, ...
        today 2026-03-15, opened 2026-03-10 -> 2026-04-10, 2026-05-10, ...
    """
    first = max(_months_between(start_date, today), 1)
    return [
        add_months(start_date, first + i)
        for i in range(OPEN_ENDED_PROJECTION_MONTHS)
    ]


def fixed_term_payout_dates(summary: DepositSummary) -> List[date]:
    """Payout dates for a deposit with a maturity date"""
    deposit = summary.deposit
    if deposit.term_days is not None:
        maturity = summary.maturity_date or add_days(deposit.start_date, deposit.term_days)
    else:
        maturity = summary.maturity_date or add_term_months(deposit.start_date, deposit.term_months)

    if deposit.payout_frequency != "monthly":
        return [maturity]

    if deposit.term_days is not None:
        # Day terms: every monthly anniversary up to maturity, tail on maturity
        dates = []
        anniversary = add_months(deposit.start_date, 1)
        while anniversary <= maturity:
            dates.append(anniversary)
            anniversary = add_months(deposit.start_date, len(dates) + 1)
        if not dates or dates[-1] != maturity:
            dates.append(maturity)
        return dates

    term_months = deposit.term_months if math.isfinite(deposit.term_months) else 0.0
    whole_months = int(max(term_months, 0))
    dates = [add_months(deposit.start_date, i + 1) for i in range(whole_months)]

    # Fractional tail (or a term shorter than a month) is paid on maturity
    if not dates or abs(term_months - round(term_months)) >= 1e-9:
        dates.append(maturity)
    return dates


def payout_events(summary: DepositSummary, today: date) -> Iterator[PayoutEvent]:
    """Yield (payout date, entry) pairs for one deposit"""
    deposit = summary.deposit

    if deposit.is_open_ended:
        dates = open_ended_payout_dates(deposit.start_date, today)
    else:
        dates = fixed_term_payout_dates(summary)

    lump_sum = not deposit.is_open_ended and deposit.payout_frequency == "maturity"
    amount = summary.net_interest if lump_sum else summary.net_interest / max(len(dates), 1)

    for payout_date in dates:
        yield payout_date, AllowanceEntry(
            deposit_id=deposit.id,
            name=deposit.name,
            bank_name=summary.bank.name,
            payout_frequency=deposit.payout_frequency,
            amount_net=amount,
            principal_returned=deposit.principal if lump_sum else 0.0,
            status=summary.status,
        )


def _accumulate(events: Iterable[PayoutEvent]) -> Dict[str, MonthlyAllowance]:
    buckets: Dict[str, MonthlyAllowance] = {}
    for payout_date, entry in events:
        key = month_key(payout_date)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = MonthlyAllowance(month_key=key, label=format_month_label(payout_date))
            buckets[key] = bucket
        bucket.net += entry.amount_net
        bucket.entries.append(entry)
    return buckets


def build_monthly_allowance(
    summaries: Sequence[DepositSummary], now: date | datetime
) -> List[MonthlyAllowance]:
    """
    Merge every deposit's payouts onto one monthly timeline.

    - maturity payout: full net interest in the maturity month, principal
      returned in that same bucket
    - monthly payout: net interest split evenly over the term's monthly
      anniversaries, plus a final payout on maturity for a fractional term
    - open-ended: 12 payouts of net/12 anchored to the start date's day of month

    Entries carry the summary's effective status when one is set, otherwise the
    deposit's stored status. Buckets are returned in ascending month order.
    Callers decide which summaries to include (e.g. dropping settled ones).
    """
    today = to_date(now)
    events = (event for summary in summaries for event in payout_events(summary, today))
    buckets = _accumulate(events)
    return [buckets[key] for key in sorted(buckets)]
