from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Program = Literal["conventional", "fha", "va"]
Scenario = Literal["purchase", "refinance"]
CreditScoreTier = Literal["760", "740", "720", "700", "680", "660", "640", "620"]
PmiType = Literal["monthly", "single_financed", "single_cash"]
VaUsage = Literal["first", "subsequent"]
RefinanceType = Literal["rate_term", "cash_out"]

CREDIT_SCORE_TIERS = ("760", "740", "720", "700", "680", "660", "640", "620")

LENDER_FEE_FIELDS = (
    "admin_fee",
    "processing_fee",
    "underwriting_fee",
    "doc_prep_fee",
    "credit_report_fee",
    "flood_cert_fee",
    "tax_service_fee",
)
THIRD_PARTY_FEE_FIELDS = (
    "appraisal_fee",
    "owner_title_policy",
    "lender_title_policy",
    "escrow_fee",
    "notary_fee",
    "recording_fee",
    "courier_fee",
    "pest_inspection_fee",
    "property_inspection_fee",
    "pool_inspection_fee",
    "transfer_tax",
    "mortgage_tax",
)
FEE_FIELDS = LENDER_FEE_FIELDS + THIRD_PARTY_FEE_FIELDS


class FeeOverrides(BaseModel):
    """Manual per-line fee amounts; ``None`` keeps the configured default."""

    admin_fee: Optional[float] = None
    processing_fee: Optional[float] = None
    underwriting_fee: Optional[float] = None
    doc_prep_fee: Optional[float] = None
    credit_report_fee: Optional[float] = None
    flood_cert_fee: Optional[float] = None
    tax_service_fee: Optional[float] = None
    appraisal_fee: Optional[float] = None
    owner_title_policy: Optional[float] = None
    lender_title_policy: Optional[float] = None
    escrow_fee: Optional[float] = None
    notary_fee: Optional[float] = None
    recording_fee: Optional[float] = None
    courier_fee: Optional[float] = None
    pest_inspection_fee: Optional[float] = None
    property_inspection_fee: Optional[float] = None
    pool_inspection_fee: Optional[float] = None
    transfer_tax: Optional[float] = None
    mortgage_tax: Optional[float] = None


class EscrowInputs(BaseModel):
    interest_rate: float = 0.0
    term_years: int = 30
    property_tax_monthly: float = 0.0
    property_tax_annual: float = 0.0
    home_insurance_monthly: float = 0.0
    home_insurance_annual: float = 0.0
    hoa_dues_monthly: float = 0.0
    flood_insurance_monthly: float = 0.0
    mortgage_insurance_monthly: Optional[float] = None
    prepaid_interest_amount: Optional[float] = None
    prepaid_tax_amount: Optional[float] = None
    prepaid_insurance_amount: Optional[float] = None
    loan_fee: float = 0.0
    origination_points: float = 0.0
    lender_credit_amount: float = 0.0
    closing_costs_total: Optional[float] = None
    misc_fee: float = 0.0


class PurchaseInput(FeeOverrides, EscrowInputs):
    sales_price: float = 0.0
    down_payment_amount: Optional[float] = None
    down_payment_percent: Optional[float] = None
    prepaid_interest_days: int = 15
    prepaid_tax_months: int = 6
    prepaid_insurance_months: int = 15
    seller_credit_amount: float = 0.0
    seller_credit_percent: Optional[float] = None
    deposit_amount: float = 0.0


class RefinanceInput(FeeOverrides, EscrowInputs):
    property_value: float = 0.0
    existing_loan_balance: float = 0.0
    new_loan_amount: float = 0.0
    prepaid_interest_days: int = 15
    prepaid_tax_months: int = 0
    prepaid_insurance_months: int = 0


class ConventionalPurchaseInput(PurchaseInput):
    credit_score_tier: CreditScoreTier = "740"
    pmi_type: PmiType = "monthly"


class ConventionalRefinanceInput(RefinanceInput):
    credit_score_tier: CreditScoreTier = "740"
    pmi_type: PmiType = "monthly"
    # Descriptive only: conventional pricing does not change for cash-out.
    refinance_type: RefinanceType = "rate_term"
    cash_out_amount: float = 0.0


class FhaPurchaseInput(PurchaseInput):
    pass


class FhaRefinanceInput(RefinanceInput):
    is_streamline: bool = False


class VaPurchaseInput(PurchaseInput):
    va_usage: VaUsage = "first"
    is_disabled_veteran: bool = False


class VaRefinanceInput(RefinanceInput):
    is_irrrl: bool = False
    va_usage: VaUsage = "first"
    is_disabled_veteran: bool = False
    cash_out_amount: float = 0.0


class MonthlyPaymentBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    principal_and_interest: float
    mortgage_insurance: float
    property_tax: float
    home_insurance: float
    hoa_dues: float
    flood_insurance: float
    total_monthly: float


class ClosingCostsBreakdown(BaseModel):
    """Sectioned closing costs as shown on a fee worksheet."""

    model_config = ConfigDict(frozen=True)

    # Lender fees
    loan_fee: float
    origination_fee: float
    admin_fee: float
    processing_fee: float
    underwriting_fee: float
    doc_prep_fee: float
    credit_report_fee: float
    flood_cert_fee: float
    tax_service_fee: float
    total_lender_fees: float

    # Third-party fees
    appraisal_fee: float
    owner_title_policy: float
    lender_title_policy: float
    escrow_fee: float
    notary_fee: float
    recording_fee: float
    courier_fee: float
    pest_inspection_fee: float
    property_inspection_fee: float
    pool_inspection_fee: float
    transfer_tax: float
    mortgage_tax: float
    total_third_party_fees: float

    # Prepaids
    prepaid_interest: float
    tax_reserves: float
    insurance_reserves: float
    total_prepaids: float
    prepaid_interest_days: int
    prepaid_tax_months: int
    prepaid_insurance_months: int

    mortgage_insurance_premium: float = 0.0
    misc_fee: float = 0.0

    # Credits
    seller_credit: float
    lender_credit: float
    total_credits: float

    calculated_total_closing_costs: float
    total_closing_costs: float
    adjustment: float
    net_closing_costs: float


class LoanCalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    program: Program
    scenario: Scenario
    loan_amount: float
    total_loan_amount: float
    ltv: float
    down_payment: float
    monthly_payment: MonthlyPaymentBreakdown
    closing_costs: ClosingCostsBreakdown
    cash_to_close: float
    program_fee: Optional[float] = None
    mi_rate: float = 0.0
    apr: Optional[float] = None


class SellerNetInput(BaseModel):
    sales_price: float = 0.0
    existing_loan_payoff: float = 0.0
    second_lien_payoff: float = 0.0
    commission_percent: float = 0.0
    title_insurance: float = 0.0
    escrow_fee: float = 0.0
    transfer_tax: float = 0.0
    recording_fees: float = 0.0
    repair_credits: float = 0.0
    hoa_payoff: float = 0.0
    other_debits: float = 0.0
    # Positive: seller owes the buyer.  Negative: buyer owes the seller.
    property_tax_proration: float = 0.0
    other_credits: float = 0.0


class SellerNetResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    sales_price: float

    first_mortgage_payoff: float
    second_lien_payoff: float
    total_payoffs: float

    real_estate_commission: float
    title_insurance: float
    escrow_fee: float
    transfer_tax: float
    recording_fees: float
    repair_credits: float
    hoa_payoff: float
    other_debits: float
    total_costs: float

    property_tax_proration: float
    other_credits: float
    total_credits: float

    estimated_net_proceeds: float
