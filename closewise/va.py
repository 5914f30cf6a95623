"""VA loan calculations.

VA loans carry no monthly mortgage insurance.  A one-time funding fee is
charged on the base loan and financed into it; exempt (disabled) veterans pay
no funding fee.
"""

from __future__ import annotations

import logging

from closewise.closing_costs import build_closing_costs, purchase_seller_credit
from closewise.common import (
    build_monthly_payment,
    cash_to_close_purchase,
    cash_to_close_refinance,
    compute_ltv,
    down_payment_percent,
    loan_amount,
    monthly_escrow,
    monthly_pi,
    resolve_down_payment,
    round_to_cents,
)
from closewise.config import RateBook
from closewise.models import LoanCalculationResult, VaPurchaseInput, VaRefinanceInput

logger = logging.getLogger(__name__)


def down_payment_tier(down_pct):
    if down_pct >= 10:
        return "10+"
    if down_pct >= 5:
        return "5-10"
    return "0-5"


def funding_fee_rate(
    config: RateBook,
    usage="first",
    down_pct=0.0,
    is_irrrl=False,
    is_cash_out=False,
    is_disabled_veteran=False,
):
    """Funding fee percent for a VA loan.

    The exemption is checked first, then IRRRL, then cash-out; everything else
    is priced from the usage table by down payment tier.
    """

    fees = config.va
    if is_disabled_veteran:
        return 0.0
    if is_irrrl:
        return fees.irrrl
    if is_cash_out:
        return fees.cash_out_first if usage == "first" else fees.cash_out_subsequent
    table = fees.first if usage == "first" else fees.subsequent
    return table[down_payment_tier(down_pct)]


def funding_fee(base_loan, rate_pct):
    return round_to_cents(base_loan * (rate_pct / 100))


def calculate_va_purchase(inp: VaPurchaseInput, config: RateBook) -> LoanCalculationResult:
    price = inp.sales_price
    down = resolve_down_payment(price, inp.down_payment_amount, inp.down_payment_percent)
    base_loan = loan_amount(price, down)
    ltv = compute_ltv(base_loan, price)

    rate = funding_fee_rate(
        config,
        usage=inp.va_usage,
        down_pct=down_payment_percent(price, down),
        is_disabled_veteran=inp.is_disabled_veteran,
    )
    fee = funding_fee(base_loan, rate)
    total_loan = round_to_cents(base_loan + fee)
    logger.debug(
        "VA purchase (%s use): base=%.2f funding_fee=%.2f@%.2f total=%.2f",
        inp.va_usage,
        base_loan,
        fee,
        rate,
        total_loan,
    )

    payment = build_monthly_payment(
        monthly_pi(total_loan, inp.interest_rate, inp.term_years),
        0.0,
        monthly_escrow(inp.property_tax_monthly, inp.property_tax_annual, price, config.escrow.property_tax_pct),
        monthly_escrow(inp.home_insurance_monthly, inp.home_insurance_annual, price, config.escrow.home_insurance_pct),
        inp.hoa_dues_monthly,
        inp.flood_insurance_monthly,
    )
    closing = build_closing_costs(
        inp,
        program="va",
        scenario="purchase",
        config=config,
        loan_amount=base_loan,
        interest_basis=total_loan,
        reserve_price=price,
        seller_credit=purchase_seller_credit(price, inp.seller_credit_amount, inp.seller_credit_percent),
    )
    return LoanCalculationResult(
        program="va",
        scenario="purchase",
        loan_amount=base_loan,
        total_loan_amount=total_loan,
        ltv=ltv,
        down_payment=down,
        monthly_payment=payment,
        closing_costs=closing,
        cash_to_close=cash_to_close_purchase(
            down, closing.total_closing_costs, closing.total_credits, inp.deposit_amount
        ),
        program_fee=fee,
    )


def calculate_va_refinance(inp: VaRefinanceInput, config: RateBook) -> LoanCalculationResult:
    base_loan = inp.new_loan_amount
    ltv = compute_ltv(base_loan, inp.property_value)
    is_cash_out = inp.cash_out_amount > 0

    rate = funding_fee_rate(
        config,
        usage=inp.va_usage,
        is_irrrl=inp.is_irrrl,
        is_cash_out=is_cash_out,
        is_disabled_veteran=inp.is_disabled_veteran,
    )
    fee = funding_fee(base_loan, rate)
    total_loan = round_to_cents(base_loan + fee)
    logger.debug(
        "VA refinance (irrrl=%s cash_out=%s): base=%.2f funding_fee=%.2f@%.2f total=%.2f",
        inp.is_irrrl,
        is_cash_out,
        base_loan,
        fee,
        rate,
        total_loan,
    )

    payment = build_monthly_payment(
        monthly_pi(total_loan, inp.interest_rate, inp.term_years),
        0.0,
        monthly_escrow(inp.property_tax_monthly, inp.property_tax_annual),
        monthly_escrow(inp.home_insurance_monthly, inp.home_insurance_annual),
        inp.hoa_dues_monthly,
        inp.flood_insurance_monthly,
    )
    closing = build_closing_costs(
        inp,
        program="va",
        scenario="refinance",
        config=config,
        loan_amount=base_loan,
        interest_basis=total_loan,
    )
    return LoanCalculationResult(
        program="va",
        scenario="refinance",
        loan_amount=base_loan,
        total_loan_amount=total_loan,
        ltv=ltv,
        down_payment=0.0,
        monthly_payment=payment,
        closing_costs=closing,
        cash_to_close=cash_to_close_refinance(
            inp.existing_loan_balance, closing.net_closing_costs, fee, total_loan
        ),
        program_fee=fee,
    )
