from validated_string.policies.cpf import CPF, CPF_POLICY, random_cpf
from validated_string.policies.email import EMAIL_POLICY, Email
from validated_string.policies.license_plate import LICENSE_PLATE_POLICY, BRLicensePlate
from validated_string.policies.text import NET_STRING_POLICY, TOKEN_POLICY, NETString, Token
from validated_string.policies.version import VERSION_POLICY, AppVersion

BUILTIN_POLICIES = (
    VERSION_POLICY, CPF_POLICY, EMAIL_POLICY,
    LICENSE_PLATE_POLICY, NET_STRING_POLICY, TOKEN_POLICY,
)

__all__ = [
    "AppVersion", "VERSION_POLICY",
    "CPF", "CPF_POLICY", "random_cpf",
    "Email", "EMAIL_POLICY",
    "BRLicensePlate", "LICENSE_PLATE_POLICY",
    "NETString", "NET_STRING_POLICY",
    "Token", "TOKEN_POLICY",
    "BUILTIN_POLICIES",
]
