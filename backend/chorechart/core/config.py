import os

DEPENDENT_POLICY_RESTRICT = "restrict"
DEPENDENT_POLICY_CASCADE = "cascade"
DEPENDENT_POLICIES = {DEPENDENT_POLICY_RESTRICT, DEPENDENT_POLICY_CASCADE}


def GetEnv(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def GetBool(name: str, default: bool = False) -> bool:
    value = GetEnv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "y", "on"}


def GetDependentChoresPolicy() -> str:
    """What deleting a child or task does to its chores: restrict or cascade."""
    policy = (GetEnv("CHORES_DEPENDENT_POLICY", DEPENDENT_POLICY_RESTRICT) or "").lower()
    if policy not in DEPENDENT_POLICIES:
        raise RuntimeError(
            f"CHORES_DEPENDENT_POLICY must be one of: {', '.join(sorted(DEPENDENT_POLICIES))}"
        )
    return policy


def GetAuthRealm() -> str:
    return GetEnv("AUTH_REALM", "Application")
