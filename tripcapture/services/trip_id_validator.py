"""
Service de validation du Trip ID / Trip ID validation service.

Quatre règles évaluées sans court-circuit (retour visuel par règle), mais un
seul message affiché : celui de la première règle en échec dans l'ordre de
la table ci-dessous.
"""

import re
from dataclasses import dataclass
from typing import Callable

from tripcapture.schemas.validation import RuleResult, RuleState, ValidationResult

MIN_LENGTH = 3
MAX_LENGTH = 20

_LEADING_LETTER = re.compile(r"[A-Za-z]")
_ALLOWED_CHARS = re.compile(r"[A-Za-z0-9\-]+")


@dataclass(frozen=True)
class TripIdRule:
    name: str
    description: str
    check: Callable[[str], bool]
    message: str


# Ordre = priorité du message / Order = message precedence
TRIP_ID_RULES: tuple[TripIdRule, ...] = (
    TripIdRule(
        "starts_with_letter",
        "Must start with a letter",
        lambda s: _LEADING_LETTER.match(s) is not None,
        "Trip ID must start with a letter",
    ),
    TripIdRule(
        "allowed_characters",
        "Letters, numbers and hyphens only",
        lambda s: _ALLOWED_CHARS.fullmatch(s) is not None,
        "Invalid characters detected",
    ),
    TripIdRule(
        "min_length",
        f"At least {MIN_LENGTH} characters",
        lambda s: len(s) >= MIN_LENGTH,
        "Trip ID is too short",
    ),
    TripIdRule(
        "max_length",
        f"At most {MAX_LENGTH} characters",
        lambda s: len(s) <= MAX_LENGTH,
        f"Trip ID is too long (max {MAX_LENGTH} characters)",
    ),
)


def validate_trip_id(candidate: str, rules: tuple[TripIdRule, ...] = TRIP_ID_RULES) -> ValidationResult:
    """Valider un Trip ID candidat / Validate a candidate Trip ID (pure, safe on every keystroke)."""
    if not candidate:
        return ValidationResult(
            candidate="",
            is_valid=False,
            rule_results=[RuleResult(name=r.name, description=r.description, state=RuleState.PENDING) for r in rules],
            message=None,
        )

    outcomes = [(rule, rule.check(candidate)) for rule in rules]
    message = next((rule.message for rule, passed in outcomes if not passed), None)
    return ValidationResult(
        candidate=candidate,
        is_valid=all(passed for _, passed in outcomes),
        rule_results=[
            RuleResult(
                name=rule.name,
                description=rule.description,
                state=RuleState.PASSED if passed else RuleState.FAILED,
            )
            for rule, passed in outcomes
        ],
        message=message,
    )
