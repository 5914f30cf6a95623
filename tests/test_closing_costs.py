import pytest

from closewise.closing_costs import reconcile_total, resolve_override
from closewise.config import default_rate_book
from closewise.conventional import calculate_conventional_purchase, calculate_conventional_refinance
from closewise.fha import calculate_fha_purchase, calculate_fha_refinance
from closewise.models import (
    ConventionalPurchaseInput,
    ConventionalRefinanceInput,
    FhaPurchaseInput,
    FhaRefinanceInput,
    VaPurchaseInput,
    VaRefinanceInput,
)
from closewise.va import calculate_va_purchase, calculate_va_refinance

BOOK = default_rate_book()

PURCHASE = dict(sales_price=450000, down_payment_percent=10, interest_rate=6.75)
REFINANCE = dict(
    property_value=450000, existing_loan_balance=300000, new_loan_amount=320000, interest_rate=6.25
)

CALCULATORS = [
    (calculate_conventional_purchase, ConventionalPurchaseInput, PURCHASE),
    (calculate_conventional_refinance, ConventionalRefinanceInput, REFINANCE),
    (calculate_fha_purchase, FhaPurchaseInput, PURCHASE),
    (calculate_fha_refinance, FhaRefinanceInput, REFINANCE),
    (calculate_va_purchase, VaPurchaseInput, PURCHASE),
    (calculate_va_refinance, VaRefinanceInput, REFINANCE),
]


def test_resolve_override():
    assert resolve_override(None, 995.0) == 995.0
    assert resolve_override(0, 995.0) == 995.0
    assert resolve_override(500, 995.0) == 500.0


def test_reconcile_total():
    assert reconcile_total(12000.0, None) == (12000.0, 0.0)
    assert reconcile_total(12000.0, 15000.0) == (15000.0, 3000.0)
    assert reconcile_total(12000.0, 10000.0) == (10000.0, -2000.0)


@pytest.mark.parametrize("calc, model, fields", CALCULATORS)
def test_override_total_with_adjustment(calc, model, fields):
    res = calc(model(**fields, closing_costs_total=20000), BOOK)
    cc = res.closing_costs
    assert cc.total_closing_costs == 20000
    assert cc.calculated_total_closing_costs + cc.adjustment == pytest.approx(20000)
    assert cc.net_closing_costs == pytest.approx(20000 - cc.total_credits)


@pytest.mark.parametrize("calc, model, fields", CALCULATORS)
def test_no_override_means_no_adjustment(calc, model, fields):
    cc = calc(model(**fields), BOOK).closing_costs
    assert cc.adjustment == 0.0
    assert cc.total_closing_costs == cc.calculated_total_closing_costs
    assert cc.calculated_total_closing_costs == pytest.approx(
        cc.total_lender_fees
        + cc.total_third_party_fees
        + cc.total_prepaids
        + cc.mortgage_insurance_premium
        + cc.misc_fee
    )


@pytest.mark.parametrize("calc, model, fields", CALCULATORS)
def test_recalculation_is_idempotent(calc, model, fields):
    inp = model(**fields, processing_fee=700, lender_credit_amount=1000)
    assert calc(inp, BOOK) == calc(inp, BOOK)


def test_fee_override_replaces_default():
    res = calculate_conventional_purchase(ConventionalPurchaseInput(**PURCHASE, processing_fee=500), BOOK)
    assert res.closing_costs.processing_fee == 500.0
    assert res.closing_costs.total_lender_fees == 3050.0 - 995.0 + 500.0


def test_zero_fee_override_keeps_default():
    res = calculate_conventional_purchase(ConventionalPurchaseInput(**PURCHASE, processing_fee=0), BOOK)
    assert res.closing_costs.processing_fee == 995.0


def test_origination_points_on_base_loan():
    res = calculate_fha_purchase(FhaPurchaseInput(**PURCHASE, origination_points=1), BOOK)
    assert res.closing_costs.origination_fee == 4050.0


def test_prepaid_amount_overrides():
    res = calculate_va_purchase(
        VaPurchaseInput(**PURCHASE, prepaid_interest_amount=321.0, prepaid_tax_amount=2400.0),
        BOOK,
    )
    cc = res.closing_costs
    assert cc.prepaid_interest == 321.0
    assert cc.tax_reserves == 2400.0


def test_refinance_reserves_only_when_supplied():
    cc = calculate_conventional_refinance(ConventionalRefinanceInput(**REFINANCE), BOOK).closing_costs
    assert cc.tax_reserves == 0.0
    assert cc.insurance_reserves == 0.0
    cc = calculate_conventional_refinance(
        ConventionalRefinanceInput(**REFINANCE, property_tax_monthly=500, prepaid_tax_months=3), BOOK
    ).closing_costs
    assert cc.tax_reserves == 1500.0


def test_lender_and_seller_credits():
    res = calculate_conventional_purchase(
        ConventionalPurchaseInput(**PURCHASE, seller_credit_amount=3000, lender_credit_amount=1000),
        BOOK,
    )
    cc = res.closing_costs
    assert cc.total_credits == 4000.0
    assert cc.net_closing_costs == pytest.approx(cc.total_closing_costs - 4000.0)
