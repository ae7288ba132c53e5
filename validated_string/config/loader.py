"""
YAML policy loader. One file may declare several policies under "policies:".
"""
import itertools
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Optional

import yaml

from validated_string.config.steps import (
    apply_steps, comparator_domain, resolve_comparator, resolve_normalizer, resolve_steps,
)
from validated_string.core import OrderedPolicy, Policy, PolicyConfigError, check_fixed_point
from validated_string.logging_config import get_logger

logger = get_logger("policy_loader")

CONFIG_DIR = os.path.join(os.path.dirname(__file__))

ALLOWED_KEYS = {
    "description", "prepare", "pattern", "min_length", "max_length",
    "canonicalize", "normalizer", "comparator", "examples",
}


@dataclass
class PolicyConfig:
    name: str
    description: str = ""
    prepare: list[str] = field(default_factory=list)
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    canonicalize: list[str] = field(default_factory=list)
    normalizer: Optional[str] = None
    comparator: Optional[str] = None
    examples: list[str] = field(default_factory=list)

    def build(self) -> Policy:
        """Resolve named steps and return the policy, checking examples."""
        prepare = resolve_steps(self.prepare)
        canonicalize = resolve_steps(self.canonicalize)
        try:
            compiled = re.compile(self.pattern) if self.pattern is not None else None
        except re.error as e:
            raise PolicyConfigError(f"{self.name}: invalid pattern: {e}") from e

        domain = comparator_domain(self.comparator)
        if domain is not None and compiled is None:
            raise PolicyConfigError(f"{self.name}: comparator {self.comparator} requires a pattern")

        min_length, max_length = self.min_length, self.max_length

        def validate(value: str) -> Optional[str]:
            prepared = apply_steps(value, prepare)
            if min_length is not None and len(prepared) < min_length:
                return None
            if max_length is not None and len(prepared) > max_length:
                return None
            if compiled is not None and not compiled.fullmatch(prepared):
                return None
            canonical = apply_steps(prepared, canonicalize)
            if domain is not None and not domain.fullmatch(canonical):
                return None
            return canonical

        kwargs: dict[str, Any] = dict(
            name=self.name,
            description=self.description,
            validate=validate,
            normalize=resolve_normalizer(self.normalizer),
        )
        comparator = resolve_comparator(self.comparator)
        if comparator is not None:
            policy: Policy = OrderedPolicy(are_in_increasing_order=comparator, **kwargs)
        else:
            policy = Policy(**kwargs)

        self._check_examples(policy)
        return policy

    def _check_examples(self, policy: Policy):
        rejected = [e for e in self.examples if policy.validate(e) is None]
        if rejected:
            raise PolicyConfigError(f"{self.name}: examples rejected: {rejected}")

        broken = check_fixed_point(policy, self.examples)
        if broken:
            raise PolicyConfigError(f"{self.name}: canonical form not stable for {broken}")

        if isinstance(policy, OrderedPolicy):
            canonical = [policy.validate(e) for e in self.examples]
            try:
                for lhs, rhs in itertools.permutations(canonical, 2):
                    policy.are_in_increasing_order(lhs, rhs)
            except (ValueError, TypeError) as e:
                raise PolicyConfigError(f"{self.name}: comparator failed on examples: {e}") from e


def _as_list(name: str, key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PolicyConfigError(f"{name}: {key} must be a list")
    return [str(v) for v in value]


def _as_int(name: str, key: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PolicyConfigError(f"{name}: {key} must be a non-negative integer")
    return value


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def parse_policies(raw: Any) -> dict[str, Policy]:
    """Build policies from an already parsed YAML document."""
    if not isinstance(raw, dict) or not isinstance(raw.get("policies"), dict):
        raise PolicyConfigError("policy file must contain a 'policies' mapping")

    policies = {}
    for pname, pdata in raw["policies"].items():
        pname = str(pname)
        pdata = pdata or {}
        if not isinstance(pdata, dict):
            raise PolicyConfigError(f"{pname}: policy must be a mapping")
        unknown = set(pdata) - ALLOWED_KEYS
        if unknown:
            raise PolicyConfigError(f"{pname}: unknown keys {sorted(unknown)}")

        cfg = PolicyConfig(
            name=pname,
            description=str(pdata.get("description", "")),
            prepare=_as_list(pname, "prepare", pdata.get("prepare")),
            pattern=_as_str(pdata.get("pattern")),
            min_length=_as_int(pname, "min_length", pdata.get("min_length")),
            max_length=_as_int(pname, "max_length", pdata.get("max_length")),
            canonicalize=_as_list(pname, "canonicalize", pdata.get("canonicalize")),
            normalizer=_as_str(pdata.get("normalizer")),
            comparator=_as_str(pdata.get("comparator")),
            examples=_as_list(pname, "examples", pdata.get("examples")),
        )
        policies[pname] = cfg.build()

    return policies


def load_policy_file(path: str) -> dict[str, Policy]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"No policy file found at {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PolicyConfigError(f"{path}: invalid YAML: {e}") from e

    policies = parse_policies(raw)
    logger.debug("policies_parsed", path=path, count=len(policies))
    return policies


@lru_cache(maxsize=32)
def load_policies(name: str = "policies") -> dict[str, Policy]:
    """Load a policy file bundled with the package by name."""
    return load_policy_file(os.path.join(CONFIG_DIR, f"{name}.yaml"))
