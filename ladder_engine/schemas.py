"""Pydantic schemas for validating stored records and serializing engine output"""

from datetime import date
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ladder_engine.domain.exceptions import InvalidDepositDataError
from ladder_engine.domain.models import (
    AllowanceEntry,
    Bank,
    Deposit,
    DepositSummary,
    InterestTier,
    MonthlyAllowance,
)


class CamelModel(BaseModel):
    """Accepts and emits the camelCase keys used by the stored JSON"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InterestTierSchema(CamelModel):
    """Single rate bracket"""

    up_to: Optional[float] = Field(None, gt=0, description="Bracket ceiling, null for 'and above'")
    rate: float = Field(..., ge=0)

    def to_domain(self) -> InterestTier:
        return InterestTier(up_to=self.up_to, rate=self.rate)


class BankSchema(CamelModel):
    """Bank record"""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    tax_rate: float = Field(..., ge=0, le=1)
    notes: Optional[str] = None

    def to_domain(self) -> Bank:
        return Bank(id=self.id, name=self.name, tax_rate=self.tax_rate, notes=self.notes)


class DepositSchema(CamelModel):
    """Deposit record as persisted by the application"""

    id: str = Field(..., min_length=1)
    bank_id: str = Field(..., min_length=1)
    name: str
    principal: float = Field(..., gt=0)
    start_date: date
    term_months: float = Field(0.0, ge=0)
    term_days: Optional[int] = Field(None, ge=0)
    is_open_ended: bool = False
    interest_mode: Literal["simple", "tiered"] = "simple"
    interest_treatment: Literal["reinvest", "payout"] = "reinvest"
    compounding: Literal["daily", "monthly"] = "daily"
    day_count_convention: Literal[360, 365] = 365
    flat_rate: float = Field(0.0, ge=0)
    tiers: List[InterestTierSchema] = Field(default_factory=list)
    tax_rate_override: Optional[float] = Field(None, ge=0, le=1)
    payout_frequency: Literal["monthly", "maturity"] = "maturity"
    status: Literal["active", "matured", "settled"] = "active"

    @field_validator("tiers")
    @classmethod
    def single_open_tier(cls, tiers: List[InterestTierSchema]) -> List[InterestTierSchema]:
        open_tiers = [t for t in tiers if t.up_to is None]
        if len(open_tiers) > 1:
            raise ValueError("Only one tier may be open-ended (upTo = null)")
        ceilings = [t.up_to for t in tiers if t.up_to is not None]
        if len(ceilings) != len(set(ceilings)):
            raise ValueError("Tier ceilings must be distinct")
        return tiers

    def to_domain(self) -> Deposit:
        return Deposit(
            id=self.id,
            bank_id=self.bank_id,
            name=self.name,
            principal=self.principal,
            start_date=self.start_date,
            term_months=self.term_months,
            term_days=self.term_days,
            is_open_ended=self.is_open_ended,
            interest_mode=self.interest_mode,
            interest_treatment=self.interest_treatment,
            compounding=self.compounding,
            day_count_convention=self.day_count_convention,
            flat_rate=self.flat_rate,
            tiers=[t.to_domain() for t in self.tiers],
            tax_rate_override=self.tax_rate_override,
            payout_frequency=self.payout_frequency,
            status=self.status,
        )


class DepositSummarySchema(CamelModel):
    """Serialized yield figures for one deposit"""

    deposit_id: str
    bank_name: str
    maturity_date: Optional[date]
    gross_interest: float
    net_interest: float
    gross_total: float
    net_total: float
    day_count: int
    status: str

    @classmethod
    def from_domain(cls, summary: DepositSummary) -> "DepositSummarySchema":
        return cls(
            deposit_id=summary.deposit.id,
            bank_name=summary.bank.name,
            maturity_date=summary.maturity_date,
            gross_interest=summary.gross_interest,
            net_interest=summary.net_interest,
            gross_total=summary.gross_total,
            net_total=summary.net_total,
            day_count=summary.day_count,
            status=summary.status,
        )


class AllowanceEntrySchema(CamelModel):
    """One deposit's share of a month bucket"""

    deposit_id: str
    name: str
    bank_name: str
    payout_frequency: str
    amount_net: float
    principal_returned: float
    status: str

    @classmethod
    def from_domain(cls, entry: AllowanceEntry) -> "AllowanceEntrySchema":
        return cls(
            deposit_id=entry.deposit_id,
            name=entry.name,
            bank_name=entry.bank_name,
            payout_frequency=entry.payout_frequency,
            amount_net=entry.amount_net,
            principal_returned=entry.principal_returned,
            status=entry.status,
        )


class MonthlyAllowanceSchema(CamelModel):
    """Serialized month bucket"""

    month_key: str
    label: str
    net: float
    entries: List[AllowanceEntrySchema]

    @classmethod
    def from_domain(cls, allowance: MonthlyAllowance) -> "MonthlyAllowanceSchema":
        return cls(
            month_key=allowance.month_key,
            label=allowance.label,
            net=allowance.net,
            entries=[AllowanceEntrySchema.from_domain(e) for e in allowance.entries],
        )


_deposit_list = TypeAdapter(List[DepositSchema])
_bank_list = TypeAdapter(List[BankSchema])


def parse_deposits(payload: Iterable[Any]) -> List[Deposit]:
    """Validate stored deposit records (e.g. an imported JSON array)"""
    try:
        records = _deposit_list.validate_python(list(payload))
    except ValidationError as e:
        raise InvalidDepositDataError(f"Invalid deposit records: {e}") from e
    return [r.to_domain() for r in records]


def parse_banks(payload: Iterable[Any]) -> List[Bank]:
    """Validate stored bank records"""
    try:
        records = _bank_list.validate_python(list(payload))
    except ValidationError as e:
        raise InvalidDepositDataError(f"Invalid bank records: {e}") from e
    return [r.to_domain() for r in records]
