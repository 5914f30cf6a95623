"""Arithmetic primitives shared by every loan program.

All functions here are pure: they take plain numbers and return plain numbers
(or a :class:`MonthlyPaymentBreakdown`).  Rates are annual percentages, so
``6.5`` means 6.5%.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP
from typing import Optional

from closewise.models import MonthlyPaymentBreakdown

CENT = Decimal("0.01")


def nz(x, default=0.0):
    """Return ``x`` as a float, or ``default`` when the value is missing.

    Optional inputs arrive as ``None`` when the caller left a field blank.
    Unlike a spreadsheet ``NZ()``, a ``NaN`` is passed through untouched so bad
    input surfaces in the result instead of being silently zeroed.
    """

    if x is None:
        return default
    return float(x)


def round_to_decimals(value: float, decimals: int) -> float:
    """Round half-up to ``decimals`` places."""

    if not math.isfinite(value):
        return value
    exp = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP))


def round_to_cents(value: float) -> float:
    """Round a currency amount half-up to whole cents."""

    return round_to_decimals(value, 2)


def truncate_decimals(value: float, decimals: int) -> float:
    """Drop everything past ``decimals`` places without rounding."""

    if not math.isfinite(value):
        return value
    exp = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(exp, rounding=ROUND_DOWN))


def floor_to_cents(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_FLOOR))


def monthly_pi(principal, annual_rate_pct, term_years):
    """Calculate the fully amortizing monthly principal and interest payment.

    ``principal`` is the amount financed, ``annual_rate_pct`` the nominal
    yearly rate and ``term_years`` the amortization period.  A zero rate falls
    back to straight-line repayment ``P / n`` (left unrounded); otherwise the
    standard annuity formula is applied and rounded to cents.
    """

    P = nz(principal)
    if P <= 0:
        return 0.0
    n = nz(term_years) * 12
    if nz(annual_rate_pct) <= 0:
        return P / n
    r = nz(annual_rate_pct) / 100 / 12
    compound = (1 + r) ** n
    return round_to_cents(P * ((r * compound) / (compound - 1)))


def compute_ltv(loan_amount, property_value):
    """Compute loan-to-value as a percentage rounded to 2 decimals."""

    if nz(property_value) <= 0:
        return 0.0
    return round_to_decimals(nz(loan_amount) / nz(property_value) * 100, 2)


def loan_amount(price, down_payment):
    """Base loan amount, never below zero."""

    return max(0.0, nz(price) - nz(down_payment))


def down_payment_from_percent(price, percent):
    return round_to_cents(nz(price) * (nz(percent) / 100))


def down_payment_percent(price, down_payment):
    """Down payment as a percentage of price, rounded to 2 decimals."""

    if nz(price) <= 0:
        return 0.0
    return round_to_decimals(nz(down_payment) / nz(price) * 100, 2)


def resolve_down_payment(price, amount, percent, default_percent=0.0):
    """Pick the purchase down payment.

    A non-zero dollar ``amount`` wins; otherwise ``percent`` (or
    ``default_percent`` when no percent was given) is applied to ``price``.
    """

    if amount:
        return nz(amount)
    pct = percent if percent else default_percent
    return down_payment_from_percent(price, pct)


def prepaid_interest(loan, annual_rate_pct, days=15):
    """Interest collected at closing for the days before the first payment."""

    daily_rate = nz(annual_rate_pct) / 100 / 365
    return round_to_cents(nz(loan) * daily_rate * nz(days))


def escrow_reserve(monthly_amount, months, price=None, fallback_rate_pct=0.0):
    """Months of tax or insurance collected into escrow at closing.

    When no monthly amount is known and a ``price`` is given, the monthly
    figure is estimated as ``price * fallback_rate_pct / 100 / 12``.
    """

    monthly = nz(monthly_amount)
    if monthly > 0:
        return round_to_cents(monthly * nz(months))
    if price is None:
        return 0.0
    return round_to_cents((nz(price) * nz(fallback_rate_pct) / 100 / 12) * nz(months))


def monthly_escrow(monthly_amount, annual_amount, price=None, fallback_rate_pct=0.0):
    """Monthly tax or insurance: supplied monthly, else annual / 12, else estimated."""

    if nz(monthly_amount) > 0:
        return nz(monthly_amount)
    if nz(annual_amount) > 0:
        return round_to_cents(nz(annual_amount) / 12)
    if price is None:
        return 0.0
    return round_to_cents(nz(price) * nz(fallback_rate_pct) / 100 / 12)


def origination_fee(loan, points):
    return round_to_cents(nz(loan) * (nz(points) / 100))


def seller_credit_from_percent(price, percent):
    return round_to_cents(nz(price) * (nz(percent) / 100))


def calculate_apr(loan, lender_fees, monthly_payment, term_years, iterations: int = 20):
    """Approximate the APR for disclosure.

    Solves ``PMT * (1 - (1 + r)^-n) / r = loan - lender_fees`` for the monthly
    rate with Newton's method and annualizes it.  This is an effective-rate
    estimate, not a regulatory finance-charge calculation.
    """

    amount_financed = nz(loan) - nz(lender_fees)
    n = nz(term_years) * 12
    P = nz(monthly_payment)
    if amount_financed <= 0 or n <= 0 or P <= 0:
        return 0.0

    r = (P * n / amount_financed - 1) / n
    if r <= 0:
        return 0.0
    for _ in range(iterations):
        compound = (1 + r) ** -n
        f = P * (1 - compound) / r - amount_financed
        df = P * (n * compound / (r * (1 + r)) - (1 - compound) / (r * r))
        next_r = r - f / df
        if abs(next_r - r) < 1e-6:
            r = next_r
            break
        r = next_r
    return round_to_decimals(r * 12 * 100, 3)


def cash_to_close_purchase(down_payment, total_closing_costs, total_credits, deposit=0.0):
    """Cash a buyer brings to closing."""

    return round_to_cents(
        nz(down_payment) + nz(total_closing_costs) - nz(total_credits) - nz(deposit)
    )


def cash_to_close_refinance(existing_balance, net_closing_costs, financed_fee, total_loan):
    """Cash needed to close a refinance; negative means cash back to the borrower."""

    amount_needed = nz(existing_balance) + nz(net_closing_costs) + nz(financed_fee)
    return round_to_cents(amount_needed - nz(total_loan))


def build_monthly_payment(
    principal_and_interest: float,
    mortgage_insurance: float,
    property_tax: float,
    home_insurance: float,
    hoa_dues: float,
    flood_insurance: Optional[float] = None,
) -> MonthlyPaymentBreakdown:
    """Assemble the monthly breakdown; the total is a sum of rounded lines."""

    lines = [
        round_to_cents(nz(principal_and_interest)),
        round_to_cents(nz(mortgage_insurance)),
        round_to_cents(nz(property_tax)),
        round_to_cents(nz(home_insurance)),
        round_to_cents(nz(hoa_dues)),
        round_to_cents(nz(flood_insurance)),
    ]
    return MonthlyPaymentBreakdown(
        principal_and_interest=nz(principal_and_interest),
        mortgage_insurance=lines[1],
        property_tax=lines[2],
        home_insurance=lines[3],
        hoa_dues=lines[4],
        flood_insurance=lines[5],
        total_monthly=round_to_cents(sum(lines)),
    )
