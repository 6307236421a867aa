"""Email address normalisation and structural validation."""

from protean.exceptions import ValidationError

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str | None) -> str:
    """Canonical form used for storage and case-insensitive matching."""
    return (email or "").strip().lower()


def _structural_problem(email: str) -> str | None:
    if any(ws in email for ws in (" ", "\t", "\n")):
        return "must not contain whitespace"
    if email.count("@") != 1:
        return "must contain exactly one @"

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return "has an invalid local part"
    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return "has an invalid domain"
    if "." not in domain_part:
        return "has an invalid domain"
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return "has an invalid domain"
    if ".." in email:
        return "must not contain consecutive dots"
    if any(ch in email for ch in _FORBIDDEN_CHARACTERS):
        return "contains a forbidden character"
    return None


def validate_email(email: str, field: str = "email") -> str:
    """Normalise ``email`` and raise ``ValidationError`` on ``field`` if it is malformed."""
    normalized = normalize_email(email)
    if not normalized:
        raise ValidationError({field: ["Email address is required"]})

    problem = _structural_problem(normalized)
    if problem:
        raise ValidationError({field: [f"Email address {problem}"]})
    return normalized
