"""Deposit summary builder - wraps the yield engine per deposit"""

from datetime import date, datetime
from typing import Optional

from ladder_engine.domain.cashflow import OPEN_ENDED_PROJECTION_MONTHS
from ladder_engine.domain.models import Bank, Deposit, DepositStatus, DepositSummary
from ladder_engine.domain.yield_engine import calculate_net_yield
from ladder_engine.utils.date_utils import to_date


def effective_tax_rate(deposit: Deposit, bank: Bank) -> float:
    """Deposit-level override wins over the bank's rate"""
    if deposit.tax_rate_override is not None:
        return deposit.tax_rate_override
    return bank.tax_rate


def derive_effective_status(
    deposit: Deposit, maturity_date: Optional[date], today: date
) -> DepositStatus:
    """
    Display status, never written back to storage.

    settled stays settled; an active deposit whose maturity date is today or
    earlier reads as matured (matured but not yet settled by the user).
    """
    if deposit.status == "settled":
        return "settled"
    if deposit.status == "active" and maturity_date is not None and maturity_date <= today:
        return "matured"
    return deposit.status


def build_deposit_summary(
    deposit: Deposit, bank: Bank, now: Optional[date | datetime] = None
) -> DepositSummary:
    """
    Compute yield figures for one deposit.

    Open-ended deposits have no maturity event: their interest is projected
    over a fixed 12-month window from the start date and
    maturity_date is None.

    When `now` is given the summary also carries the derived effective status.
    """
    term_months = deposit.term_months
    term_days = deposit.term_days
    if deposit.is_open_ended:
        term_months = OPEN_ENDED_PROJECTION_MONTHS
        term_days = None

    result = calculate_net_yield(
        principal=deposit.principal,
        start_date=deposit.start_date,
        term_months=term_months,
        flat_rate=deposit.flat_rate,
        tiers=deposit.tiers,
        interest_mode=deposit.interest_mode,
        tax_rate=effective_tax_rate(deposit, bank),
        interest_treatment=deposit.interest_treatment,
        compounding=deposit.compounding,
        day_count_convention=deposit.day_count_convention,
        term_days=term_days,
    )

    maturity_date = None if deposit.is_open_ended else result.maturity_date
    effective_status = None
    if now is not None:
        effective_status = derive_effective_status(deposit, maturity_date, to_date(now))

    return DepositSummary(
        deposit=deposit,
        bank=bank,
        maturity_date=maturity_date,
        gross_interest=result.gross_interest,
        net_interest=result.net_interest,
        day_count=result.day_count,
        effective_status=effective_status,
    )
