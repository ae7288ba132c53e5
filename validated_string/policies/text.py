"""
General purpose text policies.

NETString: non-empty trimmed string, ordered lexicographically.
Token: single word compared case-insensitively.
"""
from typing import Optional

from validated_string.core import OrderedPolicy, Policy, validated_type


def validate_net_string(value: str) -> Optional[str]:
    trimmed = value.strip()
    return trimmed or None


def lexicographic_order(lhs: str, rhs: str) -> bool:
    return lhs < rhs


NET_STRING_POLICY = OrderedPolicy(
    name="net_string",
    description="Non-empty trimmed string",
    validate=validate_net_string,
    are_in_increasing_order=lexicographic_order,
)

NETString = validated_type(NET_STRING_POLICY, name="NETString", module=__name__)


def validate_token(value: str) -> Optional[str]:
    token = value.strip()
    if not token or any(c.isspace() for c in token):
        return None
    return token


TOKEN_POLICY = Policy(
    name="token",
    description="Single word, case-insensitive",
    validate=validate_token,
    normalize=str.lower,
)

Token = validated_type(TOKEN_POLICY, name="Token", module=__name__)
