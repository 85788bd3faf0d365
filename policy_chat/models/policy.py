"""
Policy context domain models.

Read-only projections of a policy's structured fields and coverage rows,
fetched per chat turn for prompt inclusion.

Dependencies: pydantic
System role: Structured policy data contracts
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class CoverageType(str, Enum):
    """Closed coverage taxonomy."""

    GENERAL_LIABILITY = "general_liability"
    COMMERCIAL_PROPERTY = "commercial_property"
    BUSINESS_AUTO = "business_auto"
    WORKERS_COMPENSATION = "workers_compensation"
    UMBRELLA_EXCESS = "umbrella_excess"
    BUSINESS_OWNERS = "business_owners"
    WIND_HAIL = "wind_hail"
    FLOOD = "flood"
    EARTHQUAKE = "earthquake"
    DIFFERENCE_IN_CONDITIONS = "difference_in_conditions"
    BUILDERS_RISK = "builders_risk"
    INLAND_MARINE = "inland_marine"
    OCEAN_MARINE = "ocean_marine"
    BOILER_MACHINERY = "boiler_machinery"
    PROFESSIONAL_LIABILITY = "professional_liability"
    DIRECTORS_OFFICERS = "directors_officers"
    EMPLOYMENT_PRACTICES = "employment_practices"
    CYBER_LIABILITY = "cyber_liability"
    POLLUTION_LIABILITY = "pollution_liability"
    PRODUCT_LIABILITY = "product_liability"
    LIQUOR_LIABILITY = "liquor_liability"
    GARAGE_LIABILITY = "garage_liability"
    CRIME_FIDELITY = "crime_fidelity"
    SURETY_BOND = "surety_bond"
    MEDICAL_MALPRACTICE = "medical_malpractice"
    AVIATION = "aviation"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "CoverageType":
        """Resolve a stored coverage string; anything unrecognised is OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER

    @property
    def label(self) -> str:
        return COVERAGE_LABELS[self]


COVERAGE_LABELS: dict[CoverageType, str] = {
    CoverageType.GENERAL_LIABILITY: "General Liability",
    CoverageType.COMMERCIAL_PROPERTY: "Commercial Property",
    CoverageType.BUSINESS_AUTO: "Business Auto",
    CoverageType.WORKERS_COMPENSATION: "Workers Compensation",
    CoverageType.UMBRELLA_EXCESS: "Umbrella / Excess",
    CoverageType.BUSINESS_OWNERS: "Business Owners (BOP)",
    CoverageType.WIND_HAIL: "Wind / Hail",
    CoverageType.FLOOD: "Flood",
    CoverageType.EARTHQUAKE: "Earthquake",
    CoverageType.DIFFERENCE_IN_CONDITIONS: "Difference in Conditions",
    CoverageType.BUILDERS_RISK: "Builders Risk",
    CoverageType.INLAND_MARINE: "Inland Marine",
    CoverageType.OCEAN_MARINE: "Ocean Marine",
    CoverageType.BOILER_MACHINERY: "Boiler & Machinery",
    CoverageType.PROFESSIONAL_LIABILITY: "Professional Liability",
    CoverageType.DIRECTORS_OFFICERS: "Directors & Officers",
    CoverageType.EMPLOYMENT_PRACTICES: "Employment Practices Liability",
    CoverageType.CYBER_LIABILITY: "Cyber Liability",
    CoverageType.POLLUTION_LIABILITY: "Pollution Liability",
    CoverageType.PRODUCT_LIABILITY: "Product Liability",
    CoverageType.LIQUOR_LIABILITY: "Liquor Liability",
    CoverageType.GARAGE_LIABILITY: "Garage Liability",
    CoverageType.CRIME_FIDELITY: "Crime / Fidelity",
    CoverageType.SURETY_BOND: "Surety Bond",
    CoverageType.MEDICAL_MALPRACTICE: "Medical Malpractice",
    CoverageType.AVIATION: "Aviation",
    CoverageType.OTHER: "Other Coverage",
}


class CoverageSnapshot(BaseModel):
    """One coverage row of a policy."""

    coverage_type: CoverageType = CoverageType.OTHER
    coverage_subtype: str | None = None
    each_occurrence_limit: Decimal | None = None
    aggregate_limit: Decimal | None = None
    deductible: Decimal | None = None
    premium: Decimal | None = None
    details: dict[str, Any] | None = None


class PolicyContextSnapshot(BaseModel):
    """Structured projection of a policy used as prompt context."""

    policy_id: UUID
    policy_number: str | None = None
    carrier_name: str | None = None
    insured_name: str | None = None
    policy_status: str | None = None
    effective_date: date | None = None
    expiration_date: date | None = None
    total_premium: Decimal | None = None
    extraction_confidence: Decimal | None = None
    coverages: list[CoverageSnapshot] = Field(default_factory=list)
