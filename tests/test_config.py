import json

import pytest
from pydantic import ValidationError

from closewise.config import FeeSchedule, default_rate_book, load_rate_book
from closewise.conventional import lookup_pmi_rate


def test_default_rate_book():
    book = default_rate_book()
    assert book.limits.conforming == 766550
    assert set(book.limits.model_dump()) == {"conforming", "fha"}
    assert book.fha.ufmip_purchase == 1.75
    assert book.va.first["0-5"] == 2.15
    assert book.fee_schedule("conventional", "purchase").processing_fee == 995
    assert book.fee_schedule("va", "refinance").lender_title_policy == 1115


def test_unknown_fee_schedule_charges_nothing():
    assert default_rate_book().fee_schedule("usda", "purchase") == FeeSchedule()


def test_default_tables_are_not_shared():
    a = default_rate_book()
    b = default_rate_book()
    a.pmi.monthly["conforming"][">80"]["760"] = 9.99
    assert b.pmi.monthly["conforming"][">80"]["760"] == 0.19


def test_load_rate_book_overrides(tmp_path):
    file = tmp_path / "rates.json"
    file.write_text(
        json.dumps(
            {
                "fha": {"ufmip_purchase": 2.0},
                "fees": {"fha_purchase": {"processing_fee": 100}},
            }
        )
    )
    book = load_rate_book(file)
    assert book.fha.ufmip_purchase == 2.0
    assert book.fha.mip_purchase == 0.55
    assert book.fee_schedule("fha", "purchase").processing_fee == 100
    assert book.fee_schedule("conventional", "purchase").processing_fee == 995


def test_load_rate_book_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rate_book(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"fha": {"ufmip_purchase": "lots"}}))
    with pytest.raises(ValidationError):
        load_rate_book(bad)


def test_partial_fee_schedule_keeps_other_lines(tmp_path):
    file = tmp_path / "rates.json"
    file.write_text(json.dumps({"fees": {"fha_purchase": {"processing_fee": 500}}}))
    fees = load_rate_book(file).fee_schedule("fha", "purchase")
    assert fees.processing_fee == 500
    assert fees.underwriting_fee == 1495
    assert fees.pool_inspection_fee == 100


def test_partial_pmi_table_keeps_other_bands(tmp_path):
    file = tmp_path / "rates.json"
    file.write_text(json.dumps({"pmi": {"monthly": {"conforming": {">80": {"740": 0.30}}}}}))
    book = load_rate_book(file)
    assert book.pmi.monthly["conforming"][">80"]["740"] == 0.30
    assert book.pmi.monthly["conforming"][">80"]["760"] == 0.19
    assert lookup_pmi_rate(95, 5, "740", 900000, "monthly", book) == 0.85
    assert lookup_pmi_rate(95, 5, "740", 475000, "monthly", book) == 0.70
