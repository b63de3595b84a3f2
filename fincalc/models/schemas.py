"""Pydantic request / response schemas for all API endpoints.

Field names are camelCase on the wire.  Field constraints are the input
boundary: negative or non-finite amounts, rates or terms never reach the
services.
"""

from __future__ import annotations
import math
from datetime import date
from typing import Annotated, Dict, List, Literal, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from fincalc.config import settings
from fincalc.models.domain import (
    AgeCategory,
    BracketTable,
    GstCalculationType,
    Instrument,
    RegimeName,
    TaxRegime,
    TaxResult,
)

class BracketSchema(BaseModel):
    """One marginal-rate bracket."""
    model_config = ConfigDict(allow_inf_nan=False)

    lowerBound: float = Field(..., ge=0, description="Income at which this rate starts")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as a fraction (0.05 = 5 %)")

def to_bracket_table(brackets: List[BracketSchema]) -> BracketTable:
    """Raises ``ValueError`` if the bounds are not strictly increasing."""
    return BracketTable.from_pairs([(b.lowerBound, b.rate) for b in brackets])

def _non_negative_deductions(value: Dict[str, float]) -> Dict[str, float]:
    for code, amount in value.items():
        if not math.isfinite(amount):
            raise ValueError(f"Deduction '{code}' must be a finite amount")
        if amount < 0:
            raise ValueError(f"Deduction '{code}' must not be negative")
    return {code.upper(): amount for code, amount in value.items()}

Deductions = Annotated[Dict[str, float], AfterValidator(_non_negative_deductions)]

# ── 1. Income tax  (/tax:calculate, /tax:compare, /tax:brackets) ─────────

class TaxRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    income: float = Field(..., ge=0, description="Annual gross income in INR")
    deductions: Deductions = Field(
        default_factory=dict,
        description="Claimed deductions by section code, e.g. {'80C': 150000}",
    )
    ageCategory: AgeCategory = AgeCategory.BELOW_60
    regime: RegimeName = RegimeName.NEW
    financialYear: str = Field(settings.DEFAULT_FINANCIAL_YEAR, description="e.g. 2024-25")
    applyStandardDeduction: bool = Field(
        False, description="Subtract the regime's standard deduction for salaried income",
    )
    brackets: Optional[List[BracketSchema]] = Field(
        None, min_length=1, description="Custom bracket table replacing the built-in one",
    )

class TaxResponse(BaseModel):
    regime: RegimeName
    financialYear: str
    grossIncome: float
    totalDeductions: float
    taxableIncome: float
    baseTax: float = Field(..., description="Tax from the bracket table before rebate and cess")
    rebate: float = Field(..., description="Rebate actually applied (≤ baseTax)")
    cess: float = Field(..., description="Health & education cess on the post-rebate tax")
    totalTax: float
    netIncome: float

    @classmethod
    def from_result(cls, result: TaxResult, regime: TaxRegime) -> "TaxResponse":
        return cls(
            regime=regime.name,
            financialYear=regime.financial_year,
            grossIncome=result.gross_income,
            totalDeductions=result.total_deductions,
            taxableIncome=result.taxable_income,
            baseTax=result.base_tax,
            rebate=result.rebate,
            cess=result.cess,
            totalTax=result.total_tax,
            netIncome=result.net_income,
        )

class CompareRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    income: float = Field(..., ge=0)
    deductions: Deductions = Field(default_factory=dict)
    ageCategory: AgeCategory = AgeCategory.BELOW_60
    financialYear: str = settings.DEFAULT_FINANCIAL_YEAR
    includeStandardDeduction: bool = True

class CompareResponse(BaseModel):
    old: TaxResponse
    new: TaxResponse
    recommended: RegimeName
    savings: float = Field(..., description="Tax saved by choosing the recommended regime")

class BracketsRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    taxableIncome: float = Field(..., ge=0)
    brackets: List[BracketSchema] = Field(..., min_length=1)

class BracketsResponse(BaseModel):
    taxableIncome: float
    tax: float
    effectiveRate: float = Field(..., description="tax / taxableIncome (0 for zero income)")

class RegimeSchema(BaseModel):
    name: RegimeName
    financialYear: str
    ageCategory: Optional[AgeCategory] = None
    brackets: List[BracketSchema]
    cessRate: float
    rebateThreshold: float
    rebateAmount: float
    standardDeduction: float
    allowsDeductions: bool

    @classmethod
    def from_regime(cls, regime: TaxRegime) -> "RegimeSchema":
        return cls(
            name=regime.name,
            financialYear=regime.financial_year,
            ageCategory=regime.age_category,
            brackets=[
                BracketSchema(lowerBound=b.lower_bound, rate=b.rate)
                for b in regime.table.brackets
            ],
            cessRate=regime.cess_rate,
            rebateThreshold=regime.rebate_threshold,
            rebateAmount=regime.rebate_amount,
            standardDeduction=regime.standard_deduction,
            allowsDeductions=regime.allows_deductions,
        )

# ── 2. GST  (/gst:calculate) ─────────────────────────────────────────────

class GstRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float = Field(..., gt=0, description="Invoice amount in INR")
    rate: float = Field(18.0, ge=0, le=100, description="GST rate in percent")
    calculationType: GstCalculationType = GstCalculationType.EXCLUSIVE

class GstResponse(BaseModel):
    netAmount: float
    gstAmount: float
    totalAmount: float
    rate: float
    type: GstCalculationType

class GstSlab(BaseModel):
    rate: float
    label: str

# ── 3. Deposits  (/investments:maturity) ─────────────────────────────────

class InvestmentRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    instrument: Instrument
    amount: float = Field(..., gt=0, description="Principal, or monthly contribution for recurring")
    annualRatePercent: Optional[float] = Field(
        None, ge=0, le=100, description="Interest rate p.a.; annual instruments default to the NSC rate",
    )
    termYears: float = Field(..., gt=0, le=100)
    compoundingFrequency: Optional[int] = Field(
        None, ge=1, le=365, description="Compoundings per year (lump sum only, default quarterly)",
    )

class InvestmentResponse(BaseModel):
    instrument: Instrument
    maturityAmount: float
    totalContributed: float
    totalInterest: float
    annualRatePercent: float

# ── 4. Loans  (/loans:emi) ───────────────────────────────────────────────

class LoanRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: float = Field(..., gt=0, description="Loan principal in INR")
    annualRatePercent: float = Field(..., ge=0, le=100)
    termYears: float = Field(..., gt=0, le=50)
    includeSchedule: bool = False

class ScheduleRow(BaseModel):
    month: int
    payment: float
    principal: float
    interest: float
    balance: float

class LoanResponse(BaseModel):
    monthlyPayment: float
    totalPayment: float
    totalInterest: float
    months: int
    schedule: Optional[List[ScheduleRow]] = None

# ── 5. Income tax return  (/itr:step, /itr:prepare) ─────────────────────

class PersonalDetails(BaseModel):
    """Step 1: personal information and address."""
    firstName: str = Field(..., min_length=1)
    middleName: Optional[str] = None
    lastName: str = Field(..., min_length=1)
    pan: str = Field(..., pattern=r"^[A-Z]{5}[0-9]{4}[A-Z]$")
    aadhaar: str = Field(..., pattern=r"^[0-9]{12}$")
    dateOfBirth: date
    gender: Literal["male", "female", "other"]
    status: Literal["individual", "resident", "nri"] = "individual"
    mobile: str = Field(..., pattern=r"^[0-9]{10}$")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    flatNo: str = Field(..., min_length=1)
    premises: Optional[str] = None
    area: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    pincode: str = Field(..., pattern=r"^[1-9][0-9]{5}$")

    @field_validator("pan", mode="before")
    @classmethod
    def _upper_pan(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("aadhaar", "mobile", mode="before")
    @classmethod
    def _strip_spaces(cls, value):
        return value.replace(" ", "") if isinstance(value, str) else value

class IncomeDetails(BaseModel):
    """Step 2: income under each head for the financial year."""
    model_config = ConfigDict(allow_inf_nan=False)

    salary: float = Field(0.0, ge=0)
    allowances: float = Field(0.0, ge=0)
    houseProperty: float = Field(0.0, ge=0)
    businessIncome: float = Field(0.0, ge=0)
    capitalGains: float = Field(0.0, ge=0)
    otherSources: float = Field(0.0, ge=0)

    def total(self) -> float:
        return (
            self.salary + self.allowances + self.houseProperty
            + self.businessIncome + self.capitalGains + self.otherSources
        )

class DeductionDetails(BaseModel):
    """Step 3: Chapter VI-A deductions as claimed."""
    model_config = ConfigDict(allow_inf_nan=False)

    section80C: float = Field(0.0, ge=0)
    section80D: float = Field(0.0, ge=0)
    section80G: float = Field(0.0, ge=0)
    section80E: float = Field(0.0, ge=0)
    section80EE: float = Field(0.0, ge=0)
    section80TTA: float = Field(0.0, ge=0)

    def by_code(self) -> Dict[str, float]:
        """Claimed amounts keyed by section code ('80C', '80D', …)."""
        return {
            name.removeprefix("section"): amount
            for name, amount in self.model_dump().items()
        }

class TaxPayments(BaseModel):
    """Step 4: taxes already paid and the refund bank account."""
    model_config = ConfigDict(allow_inf_nan=False)

    tdsOnSalary: float = Field(0.0, ge=0)
    tdsOther: float = Field(0.0, ge=0)
    advanceTax: float = Field(0.0, ge=0)
    selfAssessmentTax: float = Field(0.0, ge=0)
    bankName: str = Field(..., min_length=1)
    accountNumber: str = Field(..., pattern=r"^[0-9]{9,18}$")
    ifscCode: str = Field(..., pattern=r"^[A-Z]{4}0[A-Z0-9]{6}$")

    @field_validator("ifscCode", mode="before")
    @classmethod
    def _upper_ifsc(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    def total_paid(self) -> float:
        return self.tdsOnSalary + self.tdsOther + self.advanceTax + self.selfAssessmentTax

class ReturnForm(BaseModel):
    personal: PersonalDetails
    income: IncomeDetails
    deductions: DeductionDetails = Field(default_factory=DeductionDetails)
    taxes: TaxPayments

class StepRequest(BaseModel):
    step: str = Field(..., description="personal | income | deductions | taxes")
    data: dict = Field(default_factory=dict)

class StepResponse(BaseModel):
    step: str
    valid: bool
    errors: List[str] = Field(default_factory=list)
    nextStep: Optional[str] = None

class PrepareRequest(ReturnForm):
    regime: RegimeName = RegimeName.NEW
    financialYear: str = settings.DEFAULT_FINANCIAL_YEAR

class ReturnSummary(BaseModel):
    financialYear: str
    assessmentYear: str
    regime: RegimeName
    totalIncome: float
    totalDeductions: float = Field(..., description="Chapter VI-A deductions allowed after caps")
    standardDeduction: float
    taxableIncome: float
    taxLiability: float = Field(..., description="Total tax incl. cess, rounded to the rupee")
    taxesPaid: float
    refundOrDue: float = Field(..., description="taxesPaid − taxLiability (negative = payable)")
    status: Literal["REFUND", "PAYABLE"]
    fileName: str = Field(..., description="Suggested name for the exported return")
    breakdown: TaxResponse
