"""Default rate and fee tables used to build the stock rate book.

All rates are annual percentages.  PMI tables are keyed by loan class, LTV band
and credit tier; the conforming ``>=95`` band has a separate row for balances
above ``PMI_BALANCE_SPLIT``.
"""

LOAN_LIMITS = {"conforming": 766550.0, "fha": 498257.0}

PMI_BALANCE_SPLIT = 500000.0

PMI_MONTHLY = {
    "conforming": {
        ">=95": {"760": 0.58, "740": 0.70, "720": 0.87, "700": 1.07, "680": 1.28, "660": 1.55, "640": 1.80, "620": 2.10},
        ">=95_high_balance": {"760": 0.62, "740": 0.76, "720": 0.94, "700": 1.16, "680": 1.39, "660": 1.68, "640": 1.95, "620": 2.28},
        ">=90": {"760": 0.38, "740": 0.50, "720": 0.62, "700": 0.78, "680": 0.99, "660": 1.19, "640": 1.45, "620": 1.68},
        ">80": {"760": 0.19, "740": 0.25, "720": 0.34, "700": 0.46, "680": 0.65, "660": 0.79, "640": 1.05, "620": 1.25},
    },
    "jumbo": {
        ">=95": {"760": 0.70, "740": 0.85, "720": 1.05, "700": 1.30, "680": 1.55, "660": 1.88, "640": 2.18, "620": 2.55},
        ">=90": {"760": 0.46, "740": 0.61, "720": 0.75, "700": 0.95, "680": 1.20, "660": 1.44, "640": 1.76, "620": 2.04},
        ">80": {"760": 0.23, "740": 0.30, "720": 0.41, "700": 0.56, "680": 0.79, "660": 0.96, "640": 1.27, "620": 1.52},
    },
}

PMI_SINGLE = {
    "conforming": {
        ">=95": {"760": 1.85, "740": 2.25, "720": 2.75, "700": 3.40, "680": 4.05, "660": 4.90, "640": 5.70, "620": 6.65},
        ">=95_high_balance": {"760": 2.00, "740": 2.45, "720": 2.98, "700": 3.68, "680": 4.38, "660": 5.30, "640": 6.17, "620": 7.19},
        ">=90": {"760": 1.20, "740": 1.55, "720": 1.95, "700": 2.45, "680": 3.15, "660": 3.75, "640": 4.60, "620": 5.30},
        ">80": {"760": 0.60, "740": 0.80, "720": 1.08, "700": 1.45, "680": 2.05, "660": 2.50, "640": 3.30, "620": 3.95},
    },
    "jumbo": {
        ">=95": {"760": 2.24, "740": 2.73, "720": 3.33, "700": 4.12, "680": 4.90, "660": 5.93, "640": 6.90, "620": 8.05},
        ">=90": {"760": 1.45, "740": 1.88, "720": 2.36, "700": 2.97, "680": 3.81, "660": 4.54, "640": 5.57, "620": 6.41},
        ">80": {"760": 0.73, "740": 0.97, "720": 1.31, "700": 1.76, "680": 2.48, "660": 3.03, "640": 3.99, "620": 4.78},
    },
}

FHA_RATES = {
    "ufmip_purchase": 1.75,
    "ufmip_refinance": 1.75,
    "ufmip_streamline": 0.55,
    "mip_threshold": 720000.0,
    "mip_purchase": 0.55,
    "mip_high_balance": 0.75,
    # Standard refinance MIP is charged on the total loan including UFMIP.
    "mip_refinance": 0.497,
    "mip_streamline": 0.55,
}

VA_FUNDING_FEES = {
    "first": {"10+": 1.25, "5-10": 1.50, "0-5": 2.15},
    "subsequent": {"10+": 1.25, "5-10": 1.50, "0-5": 3.30},
    "irrrl": 0.50,
    "cash_out_first": 2.15,
    "cash_out_subsequent": 3.30,
}

ESCROW_RATES = {"property_tax_pct": 1.25, "home_insurance_pct": 0.35}

_PURCHASE_FEES = {
    "processing_fee": 995.0,
    "underwriting_fee": 1495.0,
    "doc_prep_fee": 295.0,
    "credit_report_fee": 150.0,
    "flood_cert_fee": 30.0,
    "tax_service_fee": 85.0,
    "appraisal_fee": 650.0,
    "owner_title_policy": 1730.0,
    "lender_title_policy": 1515.0,
    "escrow_fee": 1115.0,
    "notary_fee": 350.0,
    "recording_fee": 275.0,
    "pest_inspection_fee": 150.0,
    "property_inspection_fee": 450.0,
}

_REFINANCE_FEES = {
    "processing_fee": 895.0,
    "underwriting_fee": 995.0,
    "doc_prep_fee": 595.0,
    "credit_report_fee": 150.0,
    "flood_cert_fee": 30.0,
    "tax_service_fee": 59.0,
    "appraisal_fee": 650.0,
    "lender_title_policy": 1015.0,
    "escrow_fee": 400.0,
    "notary_fee": 350.0,
    "recording_fee": 275.0,
}

# Fee defaults keyed by "<program>_<scenario>".  Lines not listed default to 0.
FEE_DEFAULTS = {
    "conventional_purchase": dict(_PURCHASE_FEES),
    "conventional_refinance": dict(_REFINANCE_FEES),
    "fha_purchase": {**_PURCHASE_FEES, "pool_inspection_fee": 100.0},
    "fha_refinance": dict(_REFINANCE_FEES),
    "va_purchase": dict(_PURCHASE_FEES),
    "va_refinance": {**_REFINANCE_FEES, "lender_title_policy": 1115.0},
}
