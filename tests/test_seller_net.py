from datetime import date

from closewise.models import SellerNetInput
from closewise.seller_net import calculate_seller_net, commission, hoa_proration, tax_proration

BASE = dict(
    sales_price=500000,
    existing_loan_payoff=300000,
    commission_percent=6,
    title_insurance=2000,
    escrow_fee=1500,
    transfer_tax=1000,
    recording_fees=150,
)
BASE_NET = 500000 - 300000 - (30000 + 2000 + 1500 + 1000 + 150)


def test_commission():
    assert commission(500000, 6) == 30000
    assert commission(500000, 5.5) == 27500


def test_simple_sale():
    res = calculate_seller_net(SellerNetInput(**BASE))
    assert res.total_payoffs == 300000
    assert res.real_estate_commission == 30000
    assert res.total_costs == 30000 + 2000 + 1500 + 1000 + 150
    assert res.estimated_net_proceeds == BASE_NET


def test_second_lien_and_repairs():
    res = calculate_seller_net(SellerNetInput(**BASE, second_lien_payoff=50000, repair_credits=5000))
    assert res.total_payoffs == 350000
    assert res.estimated_net_proceeds == BASE_NET - 50000 - 5000


def test_proration_owed_by_seller():
    res = calculate_seller_net(SellerNetInput(**BASE, property_tax_proration=2000))
    assert res.property_tax_proration == 2000
    assert res.total_credits == 0
    assert res.estimated_net_proceeds == BASE_NET - 2000


def test_proration_owed_to_seller():
    res = calculate_seller_net(SellerNetInput(**BASE, property_tax_proration=-1500, other_credits=500))
    assert res.property_tax_proration == -1500
    assert res.total_credits == 2000
    assert res.estimated_net_proceeds == BASE_NET + 2000


def test_negative_net_is_allowed():
    res = calculate_seller_net(SellerNetInput(sales_price=250000, existing_loan_payoff=280000))
    assert res.estimated_net_proceeds == -30000


def test_all_inputs_default_to_zero():
    res = calculate_seller_net(SellerNetInput())
    assert res.estimated_net_proceeds == 0


def test_tax_proration_arrears_and_prepaid():
    closing = date(2024, 7, 1)  # 182 days after Jan 1 in a leap year
    assert tax_proration(6000, closing) == 2991.78
    assert tax_proration(6000, closing, prepaid=True) == -3008.22
    assert tax_proration(6000, closing, period_start=date(2024, 7, 1)) == 0.0


def test_hoa_proration():
    assert hoa_proration(300, date(2024, 4, 15)) == 150
    assert hoa_proration(300, date(2024, 4, 30)) == 300
