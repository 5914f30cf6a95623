"""Rate and fee book passed to every loan calculation.

The engine never fetches configuration itself; callers build a
:class:`RateBook` (usually from JSON served by a configuration service) and
pass it in.  Every rate is an annual percentage.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from closewise import presets

logger = logging.getLogger(__name__)

RateTable = Dict[str, Dict[str, Dict[str, float]]]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoanLimits(_Frozen):
    conforming: float = presets.LOAN_LIMITS["conforming"]
    fha: float = presets.LOAN_LIMITS["fha"]


class PmiTables(_Frozen):
    """PMI rates by loan class (``conforming``/``jumbo``), LTV band and credit tier."""

    balance_split: float = presets.PMI_BALANCE_SPLIT
    monthly: RateTable = Field(default_factory=lambda: copy.deepcopy(presets.PMI_MONTHLY))
    single: RateTable = Field(default_factory=lambda: copy.deepcopy(presets.PMI_SINGLE))


class FhaRates(_Frozen):
    ufmip_purchase: float = presets.FHA_RATES["ufmip_purchase"]
    ufmip_refinance: float = presets.FHA_RATES["ufmip_refinance"]
    ufmip_streamline: float = presets.FHA_RATES["ufmip_streamline"]
    mip_threshold: float = presets.FHA_RATES["mip_threshold"]
    mip_purchase: float = presets.FHA_RATES["mip_purchase"]
    mip_high_balance: float = presets.FHA_RATES["mip_high_balance"]
    mip_refinance: float = presets.FHA_RATES["mip_refinance"]
    mip_streamline: float = presets.FHA_RATES["mip_streamline"]


class VaFundingFees(_Frozen):
    first: Dict[str, float] = Field(default_factory=lambda: copy.deepcopy(presets.VA_FUNDING_FEES["first"]))
    subsequent: Dict[str, float] = Field(default_factory=lambda: copy.deepcopy(presets.VA_FUNDING_FEES["subsequent"]))
    irrrl: float = presets.VA_FUNDING_FEES["irrrl"]
    cash_out_first: float = presets.VA_FUNDING_FEES["cash_out_first"]
    cash_out_subsequent: float = presets.VA_FUNDING_FEES["cash_out_subsequent"]


class EscrowRates(_Frozen):
    """Fallback annual tax and insurance rates applied to price when no figure is supplied."""

    property_tax_pct: float = presets.ESCROW_RATES["property_tax_pct"]
    home_insurance_pct: float = presets.ESCROW_RATES["home_insurance_pct"]


class FeeSchedule(_Frozen):
    admin_fee: float = 0.0
    processing_fee: float = 0.0
    underwriting_fee: float = 0.0
    doc_prep_fee: float = 0.0
    credit_report_fee: float = 0.0
    flood_cert_fee: float = 0.0
    tax_service_fee: float = 0.0
    appraisal_fee: float = 0.0
    owner_title_policy: float = 0.0
    lender_title_policy: float = 0.0
    escrow_fee: float = 0.0
    notary_fee: float = 0.0
    recording_fee: float = 0.0
    courier_fee: float = 0.0
    pest_inspection_fee: float = 0.0
    property_inspection_fee: float = 0.0
    pool_inspection_fee: float = 0.0
    transfer_tax: float = 0.0
    mortgage_tax: float = 0.0


def _default_fees() -> Dict[str, FeeSchedule]:
    return {key: FeeSchedule(**vals) for key, vals in presets.FEE_DEFAULTS.items()}


class RateBook(_Frozen):
    limits: LoanLimits = Field(default_factory=LoanLimits)
    pmi: PmiTables = Field(default_factory=PmiTables)
    fha: FhaRates = Field(default_factory=FhaRates)
    va: VaFundingFees = Field(default_factory=VaFundingFees)
    escrow: EscrowRates = Field(default_factory=EscrowRates)
    fees: Dict[str, FeeSchedule] = Field(default_factory=_default_fees)

    def fee_schedule(self, program: str, scenario: str) -> FeeSchedule:
        """Default fees for a program/scenario pair; unknown pairs charge nothing."""
        return self.fees.get(f"{program}_{scenario}", FeeSchedule())


def default_rate_book() -> RateBook:
    return RateBook()


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_rate_book(path: Union[str, Path]) -> RateBook:
    """Load a rate book from a JSON file.

    The document is merged field by field onto the stock rate book, so a
    partial fee schedule or PMI table only replaces the lines it names.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    book = RateBook.model_validate(_merge(default_rate_book().model_dump(), data))
    logger.info("Loaded rate book from %s (%d fee schedules)", path, len(book.fees))
    return book
