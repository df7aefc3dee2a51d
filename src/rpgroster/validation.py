"""Field rules for player writes.

Creation goes through :func:`validate_candidate` (or the boolean
:func:`is_valid`). Updates use a partial merge: every field present in a
:class:`~rpgroster.models.PlayerUpdate` is checked against the same rules as
creation, and either all of them are applied or none is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from rpgroster.config import DEFAULT_RULES, PlayerRules
from rpgroster.exceptions import ValidationFailed
from rpgroster.models import PlayerCandidate, PlayerRecord, PlayerUpdate


def _check_text(field: str, value: str, max_length: int) -> str | None:
    length = len(value.strip())
    if length == 0:
        return f"{field} must not be blank"
    if length > max_length:
        return f"{field} must be at most {max_length} characters"
    return None


def _check_experience(value: int, rules: PlayerRules) -> str | None:
    if not rules.experience_min <= value <= rules.experience_max:
        return (
            f"experience must be between {rules.experience_min} "
            f"and {rules.experience_max}"
        )
    return None


def _check_birthday(value: datetime, rules: PlayerRules) -> str | None:
    if not rules.birthday_after < value < rules.birthday_before:
        return (
            f"birthday must fall after {rules.birthday_after.year} "
            f"and before {rules.birthday_before.year}"
        )
    return None


def _field_error(field: str, value: Any, rules: PlayerRules) -> str | None:
    if field == "name":
        return _check_text("name", value, rules.name_max_length)
    if field == "title":
        return _check_text("title", value, rules.title_max_length)
    if field == "experience":
        return _check_experience(value, rules)
    if field == "birthday":
        return _check_birthday(value, rules)
    # race, profession and banned are fully typed by the model
    return None


def candidate_errors(
    candidate: PlayerCandidate,
    rules: PlayerRules = DEFAULT_RULES,
) -> list[str]:
    """Return every rule the candidate violates (empty when valid)."""

    errors: list[str] = []
    for field in ("name", "title", "race", "profession", "birthday", "experience"):
        value = getattr(candidate, field)
        if value is None:
            errors.append(f"{field} is required")
            continue
        error = _field_error(field, value, rules)
        if error:
            errors.append(error)
    return errors


def is_valid(candidate: PlayerCandidate | None, rules: PlayerRules = DEFAULT_RULES) -> bool:
    return candidate is not None and not candidate_errors(candidate, rules)


def validate_candidate(
    candidate: PlayerCandidate,
    rules: PlayerRules = DEFAULT_RULES,
) -> PlayerRecord:
    """Return an unsaved record for a valid candidate, else raise ValidationFailed."""

    errors = candidate_errors(candidate, rules)
    if errors:
        raise ValidationFailed(errors)
    return PlayerRecord(
        name=candidate.name,
        title=candidate.title,
        race=candidate.race,
        profession=candidate.profession,
        birthday=candidate.birthday,
        banned=bool(candidate.banned),
        experience=candidate.experience,
        level=candidate.level or 0,
    )


def apply_update(
    record: PlayerRecord,
    update: PlayerUpdate,
    rules: PlayerRules = DEFAULT_RULES,
) -> PlayerRecord:
    """Return a copy of ``record`` with the present update fields applied.

    Raises ValidationFailed without touching anything if any present field
    breaks its rule.
    """

    changes = update.present_fields()
    errors: list[str] = []
    for field, value in changes.items():
        error = _field_error(field, value, rules)
        if error:
            errors.append(error)
    if errors:
        raise ValidationFailed(errors)
    if not changes:
        return record
    return record.model_copy(update=changes)


__all__ = [
    "apply_update",
    "candidate_errors",
    "is_valid",
    "validate_candidate",
]
