"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Callable, Optional
from ladder_engine.domain.models import Bank, Deposit, DepositSummary, InterestTier


@pytest.fixture
def bank() -> Bank:
    """Bank with the standard 20% final withholding tax"""
    return Bank(id="bank-1", name="Test Bank", tax_rate=0.2)


@pytest.fixture
def today() -> date:
    """Fixed 'now' so projections are reproducible"""
    return date(2026, 3, 15)


@pytest.fixture
def make_deposit() -> Callable[..., Deposit]:
    """Factory for deposits with sensible defaults"""

    def _make(**overrides) -> Deposit:
        fields = dict(
            id="dep-1",
            bank_id="bank-1",
            name="Test Deposit",
            principal=120000,
            start_date=date(2026, 1, 1),
            term_months=3,
            interest_mode="simple",
            interest_treatment="payout",
            compounding="daily",
            flat_rate=0.06,
            tiers=[InterestTier(up_to=None, rate=0.06)],
            payout_frequency="maturity",
            day_count_convention=365,
            is_open_ended=False,
            status="active",
        )
        fields.update(overrides)
        return Deposit(**fields)

    return _make


@pytest.fixture
def make_summary(bank: Bank) -> Callable[..., DepositSummary]:
    """Factory for summaries with a chosen net interest, bypassing the yield engine"""

    def _make(
        deposit: Deposit,
        maturity_date: Optional[date],
        net_interest: float,
        effective_status: Optional[str] = None,
    ) -> DepositSummary:
        return DepositSummary(
            deposit=deposit,
            bank=bank,
            maturity_date=maturity_date,
            gross_interest=net_interest / 0.8,
            net_interest=net_interest,
            day_count=90,
            effective_status=effective_status,
        )

    return _make
