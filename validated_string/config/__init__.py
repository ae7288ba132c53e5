from validated_string.config.loader import PolicyConfig, load_policies, load_policy_file, parse_policies

__all__ = ["PolicyConfig", "load_policies", "load_policy_file", "parse_policies"]
