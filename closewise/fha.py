"""FHA loan calculations.

The upfront MIP (UFMIP) is charged on the base loan and financed into it, so
principal & interest and prepaid interest are both computed on the total loan
amount.  Annual MIP is collected monthly.
"""

from __future__ import annotations

import logging

from closewise.closing_costs import build_closing_costs, purchase_seller_credit
from closewise.common import (
    build_monthly_payment,
    calculate_apr,
    cash_to_close_purchase,
    cash_to_close_refinance,
    compute_ltv,
    loan_amount,
    monthly_escrow,
    monthly_pi,
    resolve_down_payment,
    round_to_cents,
)
from closewise.config import RateBook
from closewise.models import FhaPurchaseInput, FhaRefinanceInput, LoanCalculationResult

logger = logging.getLogger(__name__)

FHA_MIN_DOWN_PCT = 3.5


def ufmip(base_loan, rate_pct):
    return round_to_cents(base_loan * (rate_pct / 100))


def ufmip_rate(config: RateBook, refinance=False, streamline=False):
    if not refinance:
        return config.fha.ufmip_purchase
    if streamline:
        return config.fha.ufmip_streamline
    return config.fha.ufmip_refinance


def annual_mip_rate(base_loan, config: RateBook, refinance=False, streamline=False):
    """Annual MIP percent; base loans above the threshold pay the high-balance rate."""

    if base_loan > config.fha.mip_threshold:
        return config.fha.mip_high_balance
    if not refinance:
        return config.fha.mip_purchase
    if streamline:
        return config.fha.mip_streamline
    return config.fha.mip_refinance


def monthly_mip(loan, annual_rate_pct):
    if annual_rate_pct <= 0:
        return 0.0
    return round_to_cents((loan * (annual_rate_pct / 100)) / 12)


def _resolve_mip(override, loan, rate):
    # A positive monthly figure from the caller always wins.
    if override is not None and override > 0:
        return float(override)
    return monthly_mip(loan, rate)


def calculate_fha_purchase(inp: FhaPurchaseInput, config: RateBook) -> LoanCalculationResult:
    price = inp.sales_price
    down = resolve_down_payment(
        price, inp.down_payment_amount, inp.down_payment_percent, FHA_MIN_DOWN_PCT
    )
    base_loan = loan_amount(price, down)
    ltv = compute_ltv(base_loan, price)

    upfront = ufmip(base_loan, ufmip_rate(config))
    total_loan = round_to_cents(base_loan + upfront)
    mip_rate = annual_mip_rate(base_loan, config)
    mip = _resolve_mip(inp.mortgage_insurance_monthly, base_loan, mip_rate)
    logger.debug(
        "FHA purchase: base=%.2f ufmip=%.2f total=%.2f mip=%.2f@%.3f",
        base_loan,
        upfront,
        total_loan,
        mip,
        mip_rate,
    )

    payment = build_monthly_payment(
        monthly_pi(total_loan, inp.interest_rate, inp.term_years),
        mip,
        monthly_escrow(inp.property_tax_monthly, inp.property_tax_annual, price, config.escrow.property_tax_pct),
        monthly_escrow(inp.home_insurance_monthly, inp.home_insurance_annual, price, config.escrow.home_insurance_pct),
        inp.hoa_dues_monthly,
        inp.flood_insurance_monthly,
    )
    closing = build_closing_costs(
        inp,
        program="fha",
        scenario="purchase",
        config=config,
        loan_amount=base_loan,
        interest_basis=total_loan,
        reserve_price=price,
        seller_credit=purchase_seller_credit(price, inp.seller_credit_amount, inp.seller_credit_percent),
    )
    return LoanCalculationResult(
        program="fha",
        scenario="purchase",
        loan_amount=base_loan,
        total_loan_amount=total_loan,
        ltv=ltv,
        down_payment=down,
        monthly_payment=payment,
        closing_costs=closing,
        # UFMIP is financed, so it never appears in cash to close.
        cash_to_close=cash_to_close_purchase(
            down, closing.total_closing_costs, closing.total_credits, inp.deposit_amount
        ),
        program_fee=upfront,
        mi_rate=mip_rate,
        apr=calculate_apr(
            total_loan, closing.total_lender_fees, payment.principal_and_interest, inp.term_years
        ),
    )


def calculate_fha_refinance(inp: FhaRefinanceInput, config: RateBook) -> LoanCalculationResult:
    base_loan = inp.new_loan_amount
    ltv = compute_ltv(base_loan, inp.property_value)

    upfront = ufmip(base_loan, ufmip_rate(config, refinance=True, streamline=inp.is_streamline))
    total_loan = round_to_cents(base_loan + upfront)
    mip_rate = annual_mip_rate(base_loan, config, refinance=True, streamline=inp.is_streamline)
    # Refinance MIP is charged on the total loan including the financed UFMIP.
    mip = _resolve_mip(inp.mortgage_insurance_monthly, total_loan, mip_rate)
    logger.debug(
        "FHA refinance (streamline=%s): base=%.2f ufmip=%.2f total=%.2f mip=%.2f@%.3f",
        inp.is_streamline,
        base_loan,
        upfront,
        total_loan,
        mip,
        mip_rate,
    )

    payment = build_monthly_payment(
        monthly_pi(total_loan, inp.interest_rate, inp.term_years),
        mip,
        monthly_escrow(inp.property_tax_monthly, inp.property_tax_annual),
        monthly_escrow(inp.home_insurance_monthly, inp.home_insurance_annual),
        inp.hoa_dues_monthly,
        inp.flood_insurance_monthly,
    )
    closing = build_closing_costs(
        inp,
        program="fha",
        scenario="refinance",
        config=config,
        loan_amount=base_loan,
        interest_basis=total_loan,
    )
    return LoanCalculationResult(
        program="fha",
        scenario="refinance",
        loan_amount=base_loan,
        total_loan_amount=total_loan,
        ltv=ltv,
        down_payment=0.0,
        monthly_payment=payment,
        closing_costs=closing,
        cash_to_close=cash_to_close_refinance(
            inp.existing_loan_balance, closing.net_closing_costs, upfront, total_loan
        ),
        program_fee=upfront,
        mi_rate=mip_rate,
        apr=calculate_apr(
            total_loan, closing.total_lender_fees, payment.principal_and_interest, inp.term_years
        ),
    )
