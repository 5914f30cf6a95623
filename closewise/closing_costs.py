"""Closing cost assembly shared by the Conventional, FHA and VA engines.

Every engine hands its base loan, the balance that accrues prepaid interest and
the input record to :func:`build_closing_costs`.  Fee defaults come from the
rate book's fee table for the program/scenario; any positive manual amount on
the input replaces a default, and a positive ``closing_costs_total`` replaces
the calculated total while the difference is kept as ``adjustment``.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from closewise.common import (
    escrow_reserve,
    nz,
    origination_fee,
    prepaid_interest,
    round_to_cents,
    seller_credit_from_percent,
)
from closewise.config import RateBook
from closewise.models import (
    FEE_FIELDS,
    LENDER_FEE_FIELDS,
    THIRD_PARTY_FEE_FIELDS,
    ClosingCostsBreakdown,
    EscrowInputs,
)

logger = logging.getLogger(__name__)


def resolve_override(override: Optional[float], computed: float) -> float:
    """Manual value when it is present and positive, otherwise ``computed``."""

    if override is not None and override > 0:
        return float(override)
    return computed


def resolve_fees(inp: EscrowInputs, program: str, scenario: str, config: RateBook) -> Dict[str, float]:
    """Per-line fee amounts after applying manual overrides to the defaults."""

    defaults = config.fee_schedule(program, scenario)
    return {
        name: round_to_cents(resolve_override(getattr(inp, name, None), getattr(defaults, name)))
        for name in FEE_FIELDS
    }


def reconcile_total(calculated_total: float, override: Optional[float]) -> Tuple[float, float]:
    """Return ``(total, adjustment)`` for a calculated total and an optional override."""

    if override is not None and override > 0:
        return float(override), round_to_cents(override - calculated_total)
    return calculated_total, 0.0


def build_closing_costs(
    inp: EscrowInputs,
    *,
    program: str,
    scenario: str,
    config: RateBook,
    loan_amount: float,
    interest_basis: float,
    reserve_price: Optional[float] = None,
    mortgage_insurance_premium: float = 0.0,
    seller_credit: float = 0.0,
) -> ClosingCostsBreakdown:
    """Assemble the sectioned closing cost breakdown.

    ``loan_amount`` is the base loan (origination points apply to it) and
    ``interest_basis`` the balance prepaid interest accrues on.  Reserves fall
    back to rates on ``reserve_price`` only when a price is given.
    """

    fees = resolve_fees(inp, program, scenario, config)

    loan_fee = round_to_cents(nz(inp.loan_fee))
    orig_fee = origination_fee(loan_amount, inp.origination_points)
    total_lender_fees = round_to_cents(
        loan_fee + orig_fee + sum(fees[name] for name in LENDER_FEE_FIELDS)
    )
    total_third_party_fees = round_to_cents(sum(fees[name] for name in THIRD_PARTY_FEE_FIELDS))

    interest_days = inp.prepaid_interest_days
    tax_months = inp.prepaid_tax_months
    insurance_months = inp.prepaid_insurance_months

    interest = resolve_override(
        inp.prepaid_interest_amount,
        prepaid_interest(interest_basis, inp.interest_rate, interest_days),
    )
    tax_reserves = resolve_override(
        inp.prepaid_tax_amount,
        escrow_reserve(
            inp.property_tax_monthly or (nz(inp.property_tax_annual) / 12),
            tax_months,
            reserve_price,
            config.escrow.property_tax_pct,
        ),
    )
    insurance_reserves = resolve_override(
        inp.prepaid_insurance_amount,
        escrow_reserve(
            inp.home_insurance_monthly or (nz(inp.home_insurance_annual) / 12),
            insurance_months,
            reserve_price,
            config.escrow.home_insurance_pct,
        ),
    )
    interest = round_to_cents(interest)
    tax_reserves = round_to_cents(tax_reserves)
    insurance_reserves = round_to_cents(insurance_reserves)
    total_prepaids = round_to_cents(interest + tax_reserves + insurance_reserves)

    mi_premium = round_to_cents(nz(mortgage_insurance_premium))
    misc_fee = round_to_cents(nz(inp.misc_fee))

    seller_credit = round_to_cents(nz(seller_credit))
    lender_credit = round_to_cents(nz(inp.lender_credit_amount))
    total_credits = round_to_cents(seller_credit + lender_credit)

    calculated_total = round_to_cents(
        total_lender_fees + total_third_party_fees + total_prepaids + mi_premium + misc_fee
    )
    total, adjustment = reconcile_total(calculated_total, inp.closing_costs_total)
    if adjustment:
        logger.debug(
            "%s %s closing costs overridden: calculated=%.2f total=%.2f adjustment=%.2f",
            program,
            scenario,
            calculated_total,
            total,
            adjustment,
        )

    return ClosingCostsBreakdown(
        loan_fee=loan_fee,
        origination_fee=orig_fee,
        total_lender_fees=total_lender_fees,
        total_third_party_fees=total_third_party_fees,
        prepaid_interest=interest,
        tax_reserves=tax_reserves,
        insurance_reserves=insurance_reserves,
        total_prepaids=total_prepaids,
        prepaid_interest_days=interest_days,
        prepaid_tax_months=tax_months,
        prepaid_insurance_months=insurance_months,
        mortgage_insurance_premium=mi_premium,
        misc_fee=misc_fee,
        seller_credit=seller_credit,
        lender_credit=lender_credit,
        total_credits=total_credits,
        calculated_total_closing_costs=calculated_total,
        total_closing_costs=round_to_cents(total),
        adjustment=adjustment,
        net_closing_costs=round_to_cents(total - total_credits),
        **fees,
    )


def purchase_seller_credit(sales_price: float, amount: float, percent: Optional[float]) -> float:
    """Seller credit from a percent of price when given, else the flat amount."""

    if percent:
        return seller_credit_from_percent(sales_price, percent)
    return nz(amount)
