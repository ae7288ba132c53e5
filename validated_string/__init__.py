"""
Strings that are statically known to have passed a validation policy.
"""
from validated_string.core import (
    InvalidLiteralError,
    OrderedPolicy,
    OrderedValidatedString,
    Policy,
    PolicyConfigError,
    ValidatedString,
    ValidatedStringError,
    ValidationFailure,
    check_fixed_point,
    validated_type,
)

__all__ = [
    "Policy", "OrderedPolicy",
    "ValidatedString", "OrderedValidatedString", "validated_type",
    "ValidatedStringError", "ValidationFailure", "InvalidLiteralError", "PolicyConfigError",
    "check_fixed_point",
]
