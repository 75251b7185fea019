"""Schémas validation Trip ID / Trip ID validation schemas."""

import enum

from pydantic import BaseModel


class RuleState(str, enum.Enum):
    PENDING = "pending"  # pas encore évalué / not yet evaluated
    PASSED = "passed"
    FAILED = "failed"


class RuleResult(BaseModel):
    name: str
    description: str
    state: RuleState


class ValidationResult(BaseModel):
    candidate: str
    is_valid: bool
    rule_results: list[RuleResult]
    message: str | None = None


class TripIdCandidate(BaseModel):
    candidate: str = ""


class TripIdCheck(ValidationResult):
    """Validation + possibilité de sauvegarder / Validation plus save availability."""
    can_save: bool
