"""
Policy registry: name -> Policy.

Populated on first use with the built-in policies, the bundled YAML
policies and, if configured, Settings.policy_file.
"""
from typing import Optional

from validated_string.config.loader import load_policies, load_policy_file
from validated_string.core import Policy, PolicyConfigError, ValidatedStringError, validated_type
from validated_string.logging_config import get_logger
from validated_string.policies import BUILTIN_POLICIES
from validated_string.settings import get_settings

logger = get_logger("registry")

_policies: Optional[dict[str, Policy]] = None


class UnknownPolicyError(ValidatedStringError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown policy: {self.name}"


def _defaults() -> dict[str, Policy]:
    policies = {p.name: p for p in BUILTIN_POLICIES}
    policies.update(load_policies())

    extra = get_settings().policy_file
    if extra:
        policies.update(load_policy_file(extra))

    logger.info("policies_loaded", count=len(policies))
    return policies


def _registry() -> dict[str, Policy]:
    global _policies
    if _policies is None:
        _policies = _defaults()
    return _policies


def register(policy: Policy, replace: bool = False) -> Policy:
    policies = _registry()
    existing = policies.get(policy.name)
    if existing is not None and existing != policy and not replace:
        raise PolicyConfigError(f"Policy {policy.name} is already registered")
    policies[policy.name] = policy
    logger.debug("policy_registered", policy=policy.name)
    return policy


def get_policy(name: str) -> Policy:
    try:
        return _registry()[name]
    except KeyError:
        raise UnknownPolicyError(name) from None


def get_type(name: str):
    return validated_type(get_policy(name))


def list_policies() -> list[Policy]:
    return sorted(_registry().values(), key=lambda p: p.name)


def reset_registry():
    """Drop registered policies; the defaults are reloaded on next use."""
    global _policies
    _policies = None
