"""
Validated string wrapper.

A ValidatedString holds the canonical raw form of a value accepted by a
Policy. The Policy is a capability descriptor:

- validate (mandatory): returns the canonical raw form or None to reject
- normalize (optional): comparison key for equality and hashing
- are_in_increasing_order (OrderedPolicy only): strict order over raw values

Classes are produced per policy with validated_type(). Ordering operators
exist only on classes built from an OrderedPolicy.
"""
import re
import sys
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterable, Optional, TypeVar, overload

from pydantic import GetCoreSchemaHandler
from pydantic_core import PydanticCustomError, core_schema

from validated_string.logging_config import get_logger
from validated_string.settings import get_settings

logger = get_logger("validated_string")

T = TypeVar("T", bound="ValidatedString")


# ─── Errors ──────────────────────────────────────────────────────────────────

class ValidatedStringError(Exception):
    pass


class ValidationFailure(ValidatedStringError, ValueError):
    """Decoded string data was rejected by the policy's validator."""

    def __init__(self, policy: str, value: str):
        super().__init__(f"validation failure for policy {policy}")
        self.policy = policy
        self.value = value


class InvalidLiteralError(AssertionError):
    """A hard-coded literal failed validation. This is a programming defect."""


class PolicyConfigError(ValidatedStringError):
    pass


# ─── Policies ────────────────────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class Policy:
    name: str
    validate: Callable[[str], Optional[str]]
    normalize: Optional[Callable[[str], str]] = None
    description: str = field(default="", compare=False)

    def __post_init__(self):
        if not self.name:
            raise PolicyConfigError("policy name must be non-empty")

    @property
    def normalizes(self) -> bool:
        return self.normalize is not None

    @property
    def ordered(self) -> bool:
        return False


@dataclass(frozen=True, kw_only=True)
class OrderedPolicy(Policy):
    are_in_increasing_order: Callable[[str, str], bool]

    @property
    def ordered(self) -> bool:
        return True


def check_fixed_point(policy: Policy, samples: Iterable[str]) -> list[str]:
    """
    Return the accepted samples whose canonical form does not validate
    back to itself. Rejected samples are ignored.
    """
    broken = []
    for sample in samples:
        canonical = policy.validate(sample)
        if canonical is None:
            continue
        if policy.validate(canonical) != canonical:
            broken.append(sample)
    return broken


# ─── Wrapper ─────────────────────────────────────────────────────────────────

class ValidatedString:
    """
    Immutable string accepted by a policy.

    Use try_create() for runtime input. Calling the class (or assume_valid())
    is reserved for hard-coded literals and raises InvalidLiteralError when
    the literal is rejected.
    """

    __slots__ = ("_raw",)

    policy: ClassVar[Optional[Policy]] = None

    def __new__(cls: type[T], value: str) -> T:
        return cls.assume_valid(value)

    @classmethod
    def _require_policy(cls) -> Policy:
        if cls.policy is None:
            raise TypeError(f"{cls.__name__} has no policy; build a class with validated_type()")
        return cls.policy

    @classmethod
    def _from_canonical(cls: type[T], raw: str) -> T:
        self = object.__new__(cls)
        object.__setattr__(self, "_raw", raw)
        return self

    # ── construction ──

    @classmethod
    def try_create(cls: type[T], value: str) -> Optional[T]:
        canonical = cls._require_policy().validate(value)
        if canonical is None:
            return None
        return cls._from_canonical(canonical)

    @classmethod
    def assume_valid(cls: type[T], value: str) -> T:
        instance = cls.try_create(value)
        if instance is None:
            policy = cls._require_policy()
            logger.error("invalid_literal", policy=policy.name, literal=value)
            raise InvalidLiteralError(f'Invalid string literal "{value}" for policy {policy.name}')
        return instance

    # ── values ──

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def comparison_key(self) -> str:
        normalize = self.policy.normalize
        return self._raw if normalize is None else normalize(self._raw)

    def _same_policy(self, other: Any) -> bool:
        return isinstance(other, ValidatedString) and other.policy is self.policy

    def __eq__(self, other: object) -> bool:
        if not self._same_policy(other):
            return NotImplemented
        return self.comparison_key == other.comparison_key

    def __hash__(self) -> int:
        return hash(self.comparison_key)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"<{type(self).__name__}[{self.policy.name}] {self._raw!r}>"

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        cls = type(self)
        if getattr(sys.modules.get(cls.__module__), cls.__qualname__, None) is cls:
            return (cls, (self._raw,))
        # classes built on demand (registry, API) are found again by policy name
        return (_rebuild, (cls.policy.name, self._raw))

    # ── serialization ──

    def serialize(self) -> str:
        return self._raw

    @classmethod
    def deserialize(cls: type[T], data: Any) -> T:
        """Decode a bare string through the validating constructor."""
        if not isinstance(data, str):
            raise TypeError(f"expected str, got {type(data).__name__}")
        instance = cls.try_create(data)
        if instance is None:
            policy = cls._require_policy()
            logger.warning("deserialization_rejected", policy=policy.name)
            raise ValidationFailure(policy.name, data)
        return instance

    @classmethod
    def _validate_wire(cls, data: str):
        try:
            return cls.deserialize(data)
        except ValidationFailure as e:
            raise PydanticCustomError(
                "validation_failure",
                "Value rejected by {policy} policy",
                {"policy": e.policy},
            ) from e

    @classmethod
    def _validate_python(cls, data: Any):
        if isinstance(data, cls):
            return data
        if not isinstance(data, str):
            raise PydanticCustomError("string_type", "Input should be a valid string")
        return cls._validate_wire(data)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        cls._require_policy()
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema([
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls._validate_wire),
            ]),
            python_schema=core_schema.no_info_plain_validator_function(cls._validate_python),
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_raw, return_schema=core_schema.str_schema(),
            ),
        )


class OrderedValidatedString(ValidatedString):
    """
    ValidatedString whose policy supplies a comparator.

    Ordering uses raw values, equality uses the comparison key, so the two
    may disagree for policies that also normalize.
    """

    __slots__ = ()

    policy: ClassVar[Optional[OrderedPolicy]] = None

    def _before(self, lhs: str, rhs: str) -> bool:
        return self.policy.are_in_increasing_order(lhs, rhs)

    def __lt__(self, other: "OrderedValidatedString") -> bool:
        if not self._same_policy(other):
            return NotImplemented
        return self._before(self._raw, other._raw)

    def __gt__(self, other: "OrderedValidatedString") -> bool:
        if not self._same_policy(other):
            return NotImplemented
        return self._before(other._raw, self._raw)

    def __le__(self, other: "OrderedValidatedString") -> bool:
        if not self._same_policy(other):
            return NotImplemented
        return not self._before(other._raw, self._raw)

    def __ge__(self, other: "OrderedValidatedString") -> bool:
        if not self._same_policy(other):
            return NotImplemented
        return not self._before(self._raw, other._raw)


def _serialize_raw(value: ValidatedString) -> str:
    return value.raw


# ─── Class factory ───────────────────────────────────────────────────────────

# classes are dropped once nothing references them, so reloaded policies do not pile up
_TYPES: "weakref.WeakValueDictionary[Policy, type]" = weakref.WeakValueDictionary()


def _rebuild(policy_name: str, raw: str) -> ValidatedString:
    from validated_string.registry import get_type

    return get_type(policy_name)(raw)


def _class_name(policy_name: str) -> str:
    parts = [p for p in re.split(r"[^0-9A-Za-z]+", policy_name) if p]
    name = "".join(p[0].upper() + p[1:] for p in parts)
    if not name or not name[0].isalpha():
        name = "Validated" + name
    return name


@overload
def validated_type(
    policy: OrderedPolicy, name: Optional[str] = None, module: Optional[str] = None
) -> type[OrderedValidatedString]: ...


@overload
def validated_type(
    policy: Policy, name: Optional[str] = None, module: Optional[str] = None
) -> type[ValidatedString]: ...


def validated_type(policy, name=None, module=None):
    """
    Return the ValidatedString class for a policy.

    One class exists per policy; later calls return the cached class and
    ignore name and module. Pass module=__name__ when binding the class to
    a module-level name so instances pickle by reference; other classes
    pickle through the policy registry.
    """
    cached = _TYPES.get(policy)
    if cached is not None:
        return cached

    if module is None:
        module = __name__

    base = OrderedValidatedString if isinstance(policy, OrderedPolicy) else ValidatedString
    if policy.ordered and policy.normalizes and get_settings().warn_mixed_capabilities:
        logger.warning("policy_order_ignores_normalization", policy=policy.name)

    cls_name = name or _class_name(policy.name)
    cls = type(cls_name, (base,), {
        "__slots__": (),
        "__module__": module,
        "__qualname__": cls_name,
        "__doc__": policy.description or None,
        "policy": policy,
    })
    return _TYPES.setdefault(policy, cls)
