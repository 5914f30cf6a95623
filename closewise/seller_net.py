"""Seller net sheet: estimated proceeds after payoffs, costs and prorations."""

from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Optional

from closewise.common import nz, round_to_cents
from closewise.models import SellerNetInput, SellerNetResult

logger = logging.getLogger(__name__)

DAYS_IN_TAX_YEAR = 365


def commission(sales_price, commission_percent):
    return round_to_cents(nz(sales_price) * (nz(commission_percent) / 100))


def calculate_seller_net(inp: SellerNetInput) -> SellerNetResult:
    """Estimate what the seller walks away with.

    ``property_tax_proration`` is signed: a positive amount is owed by the
    seller and reduces proceeds, a negative amount is owed to the seller and is
    counted as a credit.  A negative net (short sale) is returned as is.
    """

    total_payoffs = round_to_cents(inp.existing_loan_payoff + inp.second_lien_payoff)
    real_estate_commission = commission(inp.sales_price, inp.commission_percent)
    total_costs = round_to_cents(
        real_estate_commission
        + inp.title_insurance
        + inp.escrow_fee
        + inp.transfer_tax
        + inp.recording_fees
        + inp.repair_credits
        + inp.hoa_payoff
        + inp.other_debits
    )

    proration = inp.property_tax_proration
    proration_debit = max(0.0, proration)
    total_credits = round_to_cents(inp.other_credits + max(0.0, -proration))

    net = round_to_cents(
        inp.sales_price - total_payoffs - total_costs - proration_debit + total_credits
    )
    logger.debug(
        "Seller net: price=%.2f payoffs=%.2f costs=%.2f credits=%.2f net=%.2f",
        inp.sales_price,
        total_payoffs,
        total_costs,
        total_credits,
        net,
    )

    return SellerNetResult(
        sales_price=inp.sales_price,
        first_mortgage_payoff=inp.existing_loan_payoff,
        second_lien_payoff=inp.second_lien_payoff,
        total_payoffs=total_payoffs,
        real_estate_commission=real_estate_commission,
        title_insurance=inp.title_insurance,
        escrow_fee=inp.escrow_fee,
        transfer_tax=inp.transfer_tax,
        recording_fees=inp.recording_fees,
        repair_credits=inp.repair_credits,
        hoa_payoff=inp.hoa_payoff,
        other_debits=inp.other_debits,
        total_costs=total_costs,
        property_tax_proration=proration,
        other_credits=inp.other_credits,
        total_credits=total_credits,
        estimated_net_proceeds=net,
    )


def tax_proration(
    annual_tax, closing_date: date, period_start: Optional[date] = None, prepaid=False
):
    """Signed property tax proration for a closing date.

    The tax period starts January 1 of the closing year unless ``period_start``
    is given.  Taxes paid in arrears return a positive amount (seller owes for
    the days owned); prepaid taxes return a negative amount (buyer reimburses
    the seller for the rest of the year).
    """

    if period_start is None:
        period_start = date(closing_date.year, 1, 1)
    daily = nz(annual_tax) / DAYS_IN_TAX_YEAR
    elapsed = (closing_date - period_start).days
    if prepaid:
        return round_to_cents(-(DAYS_IN_TAX_YEAR - elapsed) * daily)
    return round_to_cents(elapsed * daily)


def hoa_proration(monthly_dues, closing_date: date):
    """HOA dues owed by the seller for the days of the closing month."""

    days_in_month = calendar.monthrange(closing_date.year, closing_date.month)[1]
    return round_to_cents(closing_date.day * (nz(monthly_dues) / days_in_month))
