"""Conventional loan calculations: private mortgage insurance and closing costs."""

from __future__ import annotations

import logging
from decimal import Decimal

from closewise.closing_costs import build_closing_costs, purchase_seller_credit
from closewise.common import (
    build_monthly_payment,
    cash_to_close_purchase,
    cash_to_close_refinance,
    compute_ltv,
    down_payment_percent,
    floor_to_cents,
    loan_amount,
    monthly_escrow,
    monthly_pi,
    resolve_down_payment,
    round_to_cents,
    round_to_decimals,
    truncate_decimals,
)
from closewise.config import RateBook
from closewise.models import (
    ConventionalPurchaseInput,
    ConventionalRefinanceInput,
    LoanCalculationResult,
)

logger = logging.getLogger(__name__)


def pmi_required(ltv, down_pct):
    return down_pct < 20 or ltv > 80


def pmi_ltv_band(ltv, loan, jumbo, balance_split):
    """Map an LTV onto the PMI table bands ``>=95``, ``>=90`` and ``>80``."""

    if ltv >= 95:
        if not jumbo and loan > balance_split:
            return ">=95_high_balance"
        return ">=95"
    if ltv >= 90:
        return ">=90"
    return ">80"


def lookup_pmi_rate(ltv, down_pct, credit_tier, loan, pmi_type, config: RateBook):
    """Annual PMI rate (percent) for a loan, or ``0.0`` when none is required.

    Loans above the conforming limit read the ``jumbo`` table.  ``pmi_type``
    ``monthly`` reads the monthly table; both single premium types read the
    single table.
    """

    if not pmi_required(ltv, down_pct):
        return 0.0
    jumbo = loan > config.limits.conforming
    loan_class = "jumbo" if jumbo else "conforming"
    band = pmi_ltv_band(ltv, loan, jumbo, config.pmi.balance_split)
    tables = config.pmi.monthly if pmi_type == "monthly" else config.pmi.single
    rate = tables.get(loan_class, {}).get(band, {}).get(credit_tier, 0.0)
    logger.debug("PMI lookup %s/%s/%s -> %.4f", loan_class, band, credit_tier, rate)
    return rate


def monthly_pmi(loan, annual_rate_pct):
    """Monthly PMI premium.

    The monthly rate is truncated to 8 decimal places before it is applied to
    the balance, and the dollar amount is floored to the cent.
    """

    if annual_rate_pct <= 0:
        return 0.0
    monthly_rate = truncate_decimals(annual_rate_pct / 100 / 12, 8)
    premium = Decimal(str(loan)) * Decimal(str(monthly_rate))
    return floor_to_cents(float(premium))


def single_premium_pmi(loan, rate_pct):
    if rate_pct <= 0:
        return 0.0
    return round_to_cents(loan * (rate_pct / 100))


def _apply_pmi(base_loan, rate, pmi_type):
    """Return ``(monthly_mi, total_loan, cash_premium)`` for the PMI type."""

    if pmi_type == "monthly":
        return monthly_pmi(base_loan, rate), base_loan, 0.0
    premium = single_premium_pmi(base_loan, rate)
    if pmi_type == "single_financed":
        return 0.0, round_to_cents(base_loan + premium), 0.0
    return 0.0, base_loan, premium


def calculate_conventional_purchase(
    inp: ConventionalPurchaseInput, config: RateBook
) -> LoanCalculationResult:
    price = inp.sales_price
    down = resolve_down_payment(price, inp.down_payment_amount, inp.down_payment_percent)
    base_loan = loan_amount(price, down)
    ltv = compute_ltv(base_loan, price)
    down_pct = down_payment_percent(price, down)

    rate = lookup_pmi_rate(ltv, down_pct, inp.credit_score_tier, base_loan, inp.pmi_type, config)
    monthly_mi, total_loan, cash_premium = _apply_pmi(base_loan, rate, inp.pmi_type)
    logger.debug(
        "Conventional purchase: loan=%.2f ltv=%.2f pmi=%s@%.4f", base_loan, ltv, inp.pmi_type, rate
    )

    payment = build_monthly_payment(
        monthly_pi(total_loan, inp.interest_rate, inp.term_years),
        monthly_mi,
        monthly_escrow(inp.property_tax_monthly, inp.property_tax_annual, price, config.escrow.property_tax_pct),
        monthly_escrow(inp.home_insurance_monthly, inp.home_insurance_annual, price, config.escrow.home_insurance_pct),
        inp.hoa_dues_monthly,
        inp.flood_insurance_monthly,
    )
    closing = build_closing_costs(
        inp,
        program="conventional",
        scenario="purchase",
        config=config,
        loan_amount=base_loan,
        interest_basis=base_loan,
        reserve_price=price,
        mortgage_insurance_premium=cash_premium,
        seller_credit=purchase_seller_credit(price, inp.seller_credit_amount, inp.seller_credit_percent),
    )
    return LoanCalculationResult(
        program="conventional",
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
        mi_rate=rate,
    )


def calculate_conventional_refinance(
    inp: ConventionalRefinanceInput, config: RateBook
) -> LoanCalculationResult:
    base_loan = inp.new_loan_amount
    ltv = compute_ltv(base_loan, inp.property_value)
    equity_pct = round_to_decimals(100 - ltv, 2)

    rate = lookup_pmi_rate(ltv, equity_pct, inp.credit_score_tier, base_loan, inp.pmi_type, config)
    monthly_mi, total_loan, cash_premium = _apply_pmi(base_loan, rate, inp.pmi_type)
    financed_premium = round_to_cents(total_loan - base_loan)
    logger.debug(
        "Conventional %s refinance: loan=%.2f ltv=%.2f pmi=%s@%.4f",
        inp.refinance_type,
        base_loan,
        ltv,
        inp.pmi_type,
        rate,
    )

    payment = build_monthly_payment(
        monthly_pi(total_loan, inp.interest_rate, inp.term_years),
        monthly_mi,
        monthly_escrow(inp.property_tax_monthly, inp.property_tax_annual),
        monthly_escrow(inp.home_insurance_monthly, inp.home_insurance_annual),
        inp.hoa_dues_monthly,
        inp.flood_insurance_monthly,
    )
    closing = build_closing_costs(
        inp,
        program="conventional",
        scenario="refinance",
        config=config,
        loan_amount=base_loan,
        interest_basis=base_loan,
        mortgage_insurance_premium=cash_premium,
    )
    return LoanCalculationResult(
        program="conventional",
        scenario="refinance",
        loan_amount=base_loan,
        total_loan_amount=total_loan,
        ltv=ltv,
        down_payment=0.0,
        monthly_payment=payment,
        closing_costs=closing,
        cash_to_close=cash_to_close_refinance(
            inp.existing_loan_balance, closing.net_closing_costs, financed_premium, total_loan
        ),
        mi_rate=rate,
    )
