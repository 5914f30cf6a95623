import math

import pytest

from closewise.common import (
    build_monthly_payment,
    calculate_apr,
    cash_to_close_purchase,
    cash_to_close_refinance,
    compute_ltv,
    escrow_reserve,
    floor_to_cents,
    monthly_escrow,
    monthly_pi,
    nz,
    prepaid_interest,
    resolve_down_payment,
    round_to_cents,
    truncate_decimals,
)


def test_monthly_pi_standard_loan():
    assert monthly_pi(400000, 7, 30) == 2661.21


def test_monthly_pi_zero_rate_is_straight_line():
    assert monthly_pi(120000, 0, 10) == 1000.0


def test_monthly_pi_non_positive_principal():
    assert monthly_pi(0, 7, 30) == 0.0
    assert monthly_pi(-5000, 7, 30) == 0.0


def test_round_half_up_on_decimal_representation():
    assert round_to_cents(2.675) == 2.68
    assert round_to_cents(1.005) == 1.01
    assert round_to_cents(-1.005) == -1.01


def test_non_finite_values_pass_through():
    assert round_to_cents(float("inf")) == float("inf")
    assert math.isnan(round_to_cents(float("nan")))


def test_truncate_and_floor():
    assert truncate_decimals(0.7 / 100 / 12, 8) == 0.00058333
    assert floor_to_cents(10.019) == 10.01


def test_nz_defaults_missing_values():
    assert nz(None) == 0.0
    assert nz(None, 5.0) == 5.0
    assert nz(3) == 3.0


def test_compute_ltv():
    assert compute_ltv(400000, 500000) == 80.0
    assert compute_ltv(386000, 400000) == 96.5
    assert compute_ltv(100000, 0) == 0.0


def test_resolve_down_payment_prefers_amount():
    assert resolve_down_payment(500000, 50000, 20) == 50000
    assert resolve_down_payment(500000, None, 20) == 100000.0
    assert resolve_down_payment(400000, None, None, 3.5) == 14000.0


def test_prepaid_interest_uses_365_day_year():
    assert prepaid_interest(400000, 7, 15) == 1150.68


def test_escrow_reserve_falls_back_to_price():
    assert escrow_reserve(400, 6) == 2400.0
    assert escrow_reserve(0, 6, 500000, 1.25) == 3125.0
    assert escrow_reserve(0, 6) == 0.0


def test_monthly_escrow_sources():
    assert monthly_escrow(450, 0) == 450
    assert monthly_escrow(0, 6000) == 500.0
    assert monthly_escrow(0, 0, 480000, 1.25) == 500.0
    assert monthly_escrow(0, 0) == 0.0


def test_cash_to_close():
    assert cash_to_close_purchase(100000, 12000, 2000, 5000) == 105000.0
    # Negative refinance cash to close is cash back to the borrower.
    assert cash_to_close_refinance(300000, 5000, 0, 320000) == -15000.0


def test_monthly_total_is_sum_of_rounded_lines():
    mp = build_monthly_payment(1000.004, 100.005, 200.004, 50.005, 0, None)
    assert mp.principal_and_interest == 1000.004
    assert mp.mortgage_insurance == 100.01
    assert mp.home_insurance == 50.01
    assert mp.flood_insurance == 0.0
    assert mp.total_monthly == round_to_cents(1000.0 + 100.01 + 200.0 + 50.01)


def test_apr_without_fees_matches_note_rate():
    pi = monthly_pi(400000, 7, 30)
    assert calculate_apr(400000, 0, pi, 30) == pytest.approx(7.0, abs=0.01)


def test_apr_with_fees_exceeds_note_rate():
    pi = monthly_pi(400000, 7, 30)
    assert calculate_apr(400000, 6000, pi, 30) > 7.0


def test_apr_degenerate_inputs():
    assert calculate_apr(0, 0, 100, 30) == 0.0
    assert calculate_apr(400000, 0, 0, 30) == 0.0
