"""
Named string steps for declarative policies.
A step takes a string and returns a string; "remove:<chars>" deletes every
listed character.
"""
import re
from typing import Callable, Optional

from validated_string.core import PolicyConfigError
from validated_string.policies.text import lexicographic_order
from validated_string.policies.version import VERSION_RE, version_in_increasing_order

Step = Callable[[str], str]


def _collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def _digits_only(value: str) -> str:
    return re.sub(r"[^0-9]", "", value)


STEPS: dict[str, Step] = {
    "strip": str.strip,
    "upper": str.upper,
    "lower": str.lower,
    "casefold": str.casefold,
    "collapse_whitespace": _collapse_whitespace,
    "digits_only": _digits_only,
}

NORMALIZERS: dict[str, Step] = {
    "lower": str.lower,
    "upper": str.upper,
    "casefold": str.casefold,
}

COMPARATORS: dict[str, Callable[[str, str], bool]] = {
    "lexicographic": lexicographic_order,
    "dotted_numeric": version_in_increasing_order,
}

# values a comparator can order; policies using it only accept matching values
COMPARATOR_DOMAINS: dict[str, re.Pattern] = {
    "dotted_numeric": VERSION_RE,
}


def resolve_step(name: str) -> Step:
    if name.startswith("remove:"):
        chars = name[len("remove:"):]
        if not chars:
            raise PolicyConfigError("remove step needs at least one character")
        table = str.maketrans("", "", chars)
        return lambda value: value.translate(table)

    try:
        return STEPS[name]
    except KeyError:
        raise PolicyConfigError(f"Unknown step: {name}") from None


def resolve_steps(names: list[str]) -> list[Step]:
    return [resolve_step(str(s)) for s in names]


def apply_steps(value: str, steps: list[Step]) -> str:
    for step in steps:
        value = step(value)
    return value


def resolve_normalizer(name: Optional[str]) -> Optional[Step]:
    if name is None:
        return None
    try:
        return NORMALIZERS[name]
    except KeyError:
        raise PolicyConfigError(f"Unknown normalizer: {name}") from None


def resolve_comparator(name: Optional[str]) -> Optional[Callable[[str, str], bool]]:
    if name is None:
        return None
    try:
        return COMPARATORS[name]
    except KeyError:
        raise PolicyConfigError(f"Unknown comparator: {name}") from None


def comparator_domain(name: Optional[str]) -> Optional[re.Pattern]:
    return COMPARATOR_DOMAINS.get(name) if name is not None else None
