"""
Unit tests for declarative YAML policies.
"""
import pytest
import yaml

from validated_string import OrderedPolicy, PolicyConfigError, validated_type
from validated_string.config import load_policies, load_policy_file, parse_policies
from validated_string.config.steps import apply_steps, resolve_step, resolve_steps


def parse(text: str):
    return parse_policies(yaml.safe_load(text))


# ── Steps ──────────────────────────────────────────────────────────────────────

def test_steps_apply_in_order():
    steps = resolve_steps(["strip", "remove:-.", "upper"])
    assert apply_steps("  ab-c.d ", steps) == "ABCD"


def test_collapse_whitespace_and_digits_only():
    assert resolve_step("collapse_whitespace")(" a   b\tc ") == "a b c"
    assert resolve_step("digits_only")("(11) 98765-4321") == "11987654321"


@pytest.mark.parametrize("name", ["reverse", "remove:", ""])
def test_unknown_step(name):
    with pytest.raises(PolicyConfigError):
        resolve_step(name)


# ── Bundled policies ───────────────────────────────────────────────────────────

def test_bundled_policies_load():
    policies = load_policies()
    assert {"sku", "hex_color", "country_code", "username", "semver"} <= set(policies)


def test_bundled_sku():
    sku = validated_type(load_policies()["sku"])
    assert sku("xyz-0001").raw == "XYZ0001"
    assert sku.try_create("XY-0001") is None
    assert sku("ABC1234") < sku("XYZ0001")


def test_bundled_username_is_case_insensitive():
    username = validated_type(load_policies()["username"])
    assert username("Alice") == username("alice")
    assert username("Alice").raw == "Alice"
    with pytest.raises(TypeError):
        username("a1b") < username("b1c")


def test_bundled_semver_orders_numerically():
    semver = validated_type(load_policies()["semver"])
    assert semver("1.9.0") < semver("1.10.0")
    assert semver.try_create("1.2") is None


def test_bundled_semver_orders_long_components():
    semver = validated_type(load_policies()["semver"])
    small = semver("1." + "9" * 5000 + ".0")
    large = semver("1." + "1" + "0" * 5000 + ".0")
    assert small < large
    assert not large < small


# ── Parsing ────────────────────────────────────────────────────────────────────

def test_policy_with_comparator_is_ordered():
    policies = parse("""
policies:
  code:
    prepare: [strip]
    pattern: "[a-z]+"
    comparator: lexicographic
    description: lower case code
""")
    assert isinstance(policies["code"], OrderedPolicy)
    assert policies["code"].description == "lower case code"
    assert policies["code"].validate(" abc ") == "abc"
    assert policies["code"].validate("ABC") is None


def test_length_limits():
    policy = parse("""
policies:
  short:
    prepare: [strip]
    min_length: 2
    max_length: 4
""")["short"]
    assert policy.validate("a") is None
    assert policy.validate(" abcd ") == "abcd"
    assert policy.validate("abcde") is None


def test_normalizer():
    policy = parse("""
policies:
  loud:
    normalizer: upper
""")["loud"]
    assert policy.normalize("abc") == "ABC"


def test_empty_policy_accepts_anything():
    policy = parse("policies:\n  anything:\n")["anything"]
    assert policy.validate(" x ") == " x "
    assert not policy.normalizes and not policy.ordered


@pytest.mark.parametrize("text,message", [
    ("policies: []", "policies"),
    ("nothing: here", "policies"),
    ("policies:\n  p:\n    colour: red\n", "unknown keys"),
    ("policies:\n  p:\n    prepare: strip\n", "must be a list"),
    ("policies:\n  p:\n    prepare: [shout]\n", "Unknown step"),
    ("policies:\n  p:\n    pattern: '[a-z'\n", "invalid pattern"),
    ("policies:\n  p:\n    normalizer: title\n", "Unknown normalizer"),
    ("policies:\n  p:\n    comparator: random\n", "Unknown comparator"),
    ("policies:\n  p:\n    min_length: -1\n", "non-negative"),
    ("policies:\n  p:\n    max_length: 'ten'\n", "non-negative"),
    ("policies:\n  p: [1, 2]\n", "mapping"),
])
def test_invalid_config(text, message):
    with pytest.raises(PolicyConfigError, match=message):
        parse(text)


def test_examples_must_be_accepted():
    with pytest.raises(PolicyConfigError, match="examples rejected"):
        parse("""
policies:
  digits:
    pattern: "[0-9]+"
    examples: ["123", "abc"]
""")


def test_examples_must_be_fixed_points():
    with pytest.raises(PolicyConfigError, match="not stable"):
        parse("""
policies:
  shouting:
    pattern: "[a-z]+"
    canonicalize: [upper]
    examples: ["abc"]
""")


def test_dotted_numeric_requires_pattern():
    with pytest.raises(PolicyConfigError, match="requires a pattern"):
        parse("""
policies:
  release:
    prepare: [strip]
    comparator: dotted_numeric
    examples: ["1.2", "1.10"]
""")


def test_dotted_numeric_rejects_non_numeric_examples():
    with pytest.raises(PolicyConfigError, match="examples rejected"):
        parse("""
policies:
  release:
    pattern: "[a-z0-9.]+"
    comparator: dotted_numeric
    examples: ["1.2", "beta"]
""")


def test_dotted_numeric_is_total_over_accepted_values():
    release = validated_type(parse("""
policies:
  release:
    prepare: [strip]
    pattern: "[a-z0-9.]+"
    comparator: dotted_numeric
    examples: ["1.2", "1.10"]
""")["release"])

    assert release.try_create("beta") is None
    assert release.try_create("1..2") is None
    assert release("1.2") < release("1.10")


# ── Files ──────────────────────────────────────────────────────────────────────

def test_load_policy_file(policy_yaml):
    path = policy_yaml("""
policies:
  zip_code:
    prepare: [digits_only]
    pattern: "[0-9]{8}"
    examples: ["01310-100"]
""")
    policies = load_policy_file(path)
    assert policies["zip_code"].validate("01310-100") == "01310100"


def test_load_policy_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_policy_file(str(tmp_path / "missing.yaml"))


def test_load_policy_file_invalid_yaml(policy_yaml):
    with pytest.raises(PolicyConfigError, match="invalid YAML"):
        load_policy_file(policy_yaml("policies: [unclosed"))
