"""
Dotted numeric version strings ("1", "2.10", "10.0.3").
"""
import re
from typing import Optional

from validated_string.core import OrderedPolicy, validated_type

VERSION_RE = re.compile(r"[0-9]+(\.[0-9]+)*")


def validate_version(value: str) -> Optional[str]:
    value = value.strip()
    if not VERSION_RE.fullmatch(value):
        return None
    return value


def _component_key(component: str) -> tuple[int, str]:
    # integer order for any number of digits
    digits = component.lstrip("0") or "0"
    return len(digits), digits


def version_in_increasing_order(lhs: str, rhs: str) -> bool:
    """
    Compare component by component numerically; when one version is a
    prefix of the other, the shorter one comes first ("1.2" < "1.2.0").
    Components may be arbitrarily long.
    """
    left = lhs.split(".")
    right = rhs.split(".")
    for left_part, right_part in zip(left, right):
        left_key, right_key = _component_key(left_part), _component_key(right_part)
        if left_key != right_key:
            return left_key < right_key
    return len(left) < len(right)


VERSION_POLICY = OrderedPolicy(
    name="version",
    description="Dotted numeric version string",
    validate=validate_version,
    are_in_increasing_order=version_in_increasing_order,
)

AppVersion = validated_type(VERSION_POLICY, name="AppVersion", module=__name__)
