"""Yield engine - gross/net interest and maturity for a single deposit"""

import math
from datetime import date
from typing import List, Optional, Sequence, Tuple

from ladder_engine.domain.models import (
    Compounding,
    InterestMode,
    InterestTier,
    InterestTreatment,
    YieldResult,
)
from ladder_engine.utils.date_utils import (
    add_days,
    add_term_months,
    difference_in_calendar_days,
    to_date,
)

DEFAULT_DAYS_IN_YEAR = 365


def sort_tiers(tiers: Sequence[InterestTier]) -> List[InterestTier]:
    """Ascending by ceiling, the open-ended (up_to=None) tier last"""
    return sorted(tiers, key=lambda t: (t.up_to is None, t.up_to or 0.0))


def allocate_tiers(
    principal: float, tiers: Sequence[InterestTier]
) -> List[Tuple[InterestTier, float]]:
    """
    Split principal across rate brackets.

    Each tier absorbs min(remaining, ceiling - previous ceiling); the rest
    carries to the next tier. Portions sum to principal as long as the last
    tier is open-ended. Any remainder above the highest defined ceiling is
    left unallocated and earns nothing.
    """
    allocations = []
    remaining = principal
    last_threshold = 0.0

    for tier in sort_tiers(tiers):
        if remaining <= 0:
            break
        cap = math.inf if tier.up_to is None else tier.up_to
        portion = min(remaining, max(cap - last_threshold, 0.0))

        allocations.append((tier, portion))
        remaining -= portion
        last_threshold = cap

    return allocations


def _tiered_simple(
    principal: float,
    tiers: Sequence[InterestTier],
    periods: float,
    rate_per_period: float,
) -> float:
    """Bracketed interest paid out each period, never added back to principal"""
    return sum(
        portion * tier.rate * rate_per_period * periods
        for tier, portion in allocate_tiers(principal, tiers)
    )


def _tiered_compounded(
    principal: float,
    tiers: Sequence[InterestTier],
    days: int,
    months: float,
    compounding: Compounding,
    day_count_convention: int,
) -> float:
    """Bracketed interest rolled back into each bracket's balance"""
    total = 0.0
    for tier, portion in allocate_tiers(principal, tiers):
        if compounding == "monthly":
            grown = portion * (1 + tier.rate / 12) ** months
        else:
            grown = portion * (1 + tier.rate / day_count_convention) ** days
        total += grown - portion
    return total


def calculate_net_yield(
    principal: float,
    start_date: date | str,
    term_months: float,
    flat_rate: float,
    tiers: Sequence[InterestTier],
    interest_mode: InterestMode,
    tax_rate: float,
    interest_treatment: InterestTreatment = "reinvest",
    compounding: Compounding = "daily",
    day_count_convention: int = DEFAULT_DAYS_IN_YEAR,
    term_days: Optional[int] = None,
) -> YieldResult:
    """
    Compute gross/net interest, maturity date and day count for one deposit.

    Simple mode:
        gross = principal * flat_rate * day_count / day_count_convention
        Treatment and compounding flags are ignored.

    Tiered mode:
        payout   - per bracket: portion * rate * rate_per_period * periods,
                   (1/12, months) for monthly cadence or
                   (1/day_count_convention, day_count) for daily
        reinvest - per bracket: portion * (1 + rate/12)^months - portion or
                   portion * (1 + rate/day_count_convention)^day_count - portion

    net = gross * (1 - tax_rate)

    Args:
        term_days: Calendar-day term. When set it replaces term_months for the
            maturity date, and months are approximated from the day-count
            convention for the monthly cadence.

    Example:
        250,000 at 5.25%, ACT/365, 6 months from 2025-08-02:
        maturity 2026-02-02, 184 days, gross 6,616.44, net at 20% tax 5,293.15
    """
    start = to_date(start_date)
    if term_days is not None:
        maturity = add_days(start, term_days)
    else:
        maturity = add_term_months(start, term_months)
    day_count = max(1, difference_in_calendar_days(maturity, start))

    if interest_mode == "simple":
        gross_interest = principal * flat_rate * (day_count / day_count_convention)
    else:
        if term_days is not None:
            # Round half up, like the day rounding in add_term_months
            months = math.floor(term_days / (day_count_convention / 12) + 0.5)
        else:
            months = max(term_months, 0) if math.isfinite(term_months) else 0

        if interest_treatment == "payout":
            if compounding == "monthly":
                gross_interest = _tiered_simple(principal, tiers, months, 1 / 12)
            else:
                gross_interest = _tiered_simple(
                    principal, tiers, day_count, 1 / day_count_convention
                )
        else:
            gross_interest = _tiered_compounded(
                principal, tiers, day_count, months, compounding, day_count_convention
            )

    net_interest = gross_interest * (1 - tax_rate)

    return YieldResult(
        gross_interest=gross_interest,
        net_interest=net_interest,
        maturity_date=maturity,
        day_count=day_count,
    )
