"""
Email addresses. Compared case-insensitively, stored as entered (trimmed).
"""
import re
from typing import Optional

from validated_string.core import Policy, validated_type

EMAIL_RE = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")


def validate_email(value: str) -> Optional[str]:
    value = value.strip()
    if not EMAIL_RE.fullmatch(value):
        return None
    return value


def normalize_email(raw: str) -> str:
    return raw.lower()


EMAIL_POLICY = Policy(
    name="email",
    description="Email address, case-insensitive",
    validate=validate_email,
    normalize=normalize_email,
)

Email = validated_type(EMAIL_POLICY, name="Email", module=__name__)
