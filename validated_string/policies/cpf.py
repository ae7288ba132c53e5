"""
Brazilian individual taxpayer number (CPF).

Canonical form is the 11 digits with separators removed.
"""
import random
import re
from typing import Optional, Sequence

from validated_string.core import Policy, validated_type

CPF_LENGTH = 11


def check_digit(digits: Sequence[int]) -> int:
    """Mod-11 check digit over 9 digits (first) or 10 digits (second)."""
    weights = range(len(digits) + 1, 1, -1)
    digit = 11 - sum(d * w for d, w in zip(digits, weights)) % 11
    return 0 if digit > 9 else digit


def validate_cpf(value: str) -> Optional[str]:
    digits = re.sub(r"[^0-9]", "", value)
    if len(digits) != CPF_LENGTH:
        return None

    numbers = [int(c) for c in digits]
    if len(set(numbers)) == 1:
        return None
    if check_digit(numbers[:9]) != numbers[9] or check_digit(numbers[:10]) != numbers[10]:
        return None

    return digits


CPF_POLICY = Policy(
    name="cpf",
    description="Brazilian CPF number, digits only",
    validate=validate_cpf,
)

CPF = validated_type(CPF_POLICY, name="CPF", module=__name__)


def random_cpf(rng: Optional[random.Random] = None) -> CPF:
    """Create a random valid CPF."""
    rng = rng or random.Random()
    while True:
        numbers = [rng.randint(0, 9) for _ in range(9)]
        numbers.append(check_digit(numbers))
        numbers.append(check_digit(numbers))
        # all-equal digit runs carry valid check digits but are rejected
        cpf = CPF.try_create("".join(str(n) for n in numbers))
        if cpf is not None:
            return cpf
