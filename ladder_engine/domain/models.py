"""Domain models - pure Python dataclasses representing deposits and their projections"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional

InterestMode = Literal["simple", "tiered"]
InterestTreatment = Literal["reinvest", "payout"]
Compounding = Literal["daily", "monthly"]
PayoutFrequency = Literal["monthly", "maturity"]
DepositStatus = Literal["active", "matured", "settled"]


@dataclass(frozen=True)
class InterestTier:
    """Rate bracket; up_to=None means 'and above'"""

    up_to: Optional[float]
    rate: float


@dataclass(frozen=True)
class Bank:
    """Bank holding one or more deposits"""

    id: str
    name: str
    tax_rate: float
    notes: Optional[str] = None


@dataclass(frozen=True)
class Deposit:
    """Fixed-income deposit as stored by the surrounding application"""

    id: str
    bank_id: str
    name: str
    principal: float
    start_date: date
    term_months: float = 0.0
    # Calendar-day term; takes precedence over term_months when set
    term_days: Optional[int] = None
    is_open_ended: bool = False
    interest_mode: InterestMode = "simple"
    interest_treatment: InterestTreatment = "reinvest"
    compounding: Compounding = "daily"
    day_count_convention: int = 365
    flat_rate: float = 0.0
    tiers: List[InterestTier] = field(default_factory=list)
    tax_rate_override: Optional[float] = None
    payout_frequency: PayoutFrequency = "maturity"
    status: DepositStatus = "active"


@dataclass(frozen=True)
class YieldResult:
    """Output of the yield engine for one deposit"""

    gross_interest: float
    net_interest: float
    maturity_date: date
    day_count: int


@dataclass(frozen=True)
class DepositSummary:
    """Deposit + resolved bank + yield figures"""

    deposit: Deposit
    bank: Bank
    maturity_date: Optional[date]  # None for open-ended deposits
    gross_interest: float
    net_interest: float
    day_count: int
    # Status computed by the caller (e.g. matured-but-unsettled); wins over deposit.status
    effective_status: Optional[DepositStatus] = None

    @property
    def gross_total(self) -> float:
        return self.deposit.principal + self.gross_interest

    @property
    def net_total(self) -> float:
        return self.deposit.principal + self.net_interest

    @property
    def status(self) -> DepositStatus:
        return self.effective_status or self.deposit.status


@dataclass
class AllowanceEntry:
    """One deposit's contribution to a month bucket"""

    deposit_id: str
    name: str
    bank_name: str
    payout_frequency: PayoutFrequency
    amount_net: float
    principal_returned: float
    status: DepositStatus


@dataclass
class MonthlyAllowance:
    """Net cash receipts attributable to one calendar month"""

    month_key: str
    label: str
    net: float = 0.0
    entries: List[AllowanceEntry] = field(default_factory=list)


@dataclass
class CurrentMonthBreakdown:
    """Current month's net income split by settlement state"""

    net: float
    pending_net: float  # matured but not yet settled
    settled_net: float


@dataclass
class NextMaturity:
    """The soonest upcoming maturity in the portfolio"""

    deposit_id: str
    name: str
    bank_name: str
    maturity_date: date
    net_proceeds: float


@dataclass
class PortfolioSnapshot:
    """Everything the dashboard needs, computed for one `now`"""

    summaries: List[DepositSummary]
    total_principal: float
    current_month_breakdown: CurrentMonthBreakdown
    next_maturity: Optional[NextMaturity]
    monthly_allowance: List[MonthlyAllowance]
    current_month_full: Optional[MonthlyAllowance]
