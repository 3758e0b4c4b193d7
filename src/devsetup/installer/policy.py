"""
Operator Decisions

The "decide" phase of a step: interactive yes/no answers and the
non-interactive accept/decline policy map.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional

from devsetup.installer.exceptions import ConfigError


class OperatorResponse(str, Enum):
    """Answer to an interactive yes/no prompt."""
    YES = "yes"
    NO = "no"
    DEFAULT = "default"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "OperatorResponse":
        """Map raw input to a response; unrecognised input means DEFAULT."""
        value = (raw or "").strip().lower()
        if value in ("y", "yes"):
            return cls.YES
        if value in ("n", "no"):
            return cls.NO
        return cls.DEFAULT

    def resolve(self, default: bool) -> bool:
        if self is OperatorResponse.YES:
            return True
        if self is OperatorResponse.NO:
            return False
        return default


class Decision(str, Enum):
    """Non-interactive policy value for a step."""
    ACCEPT = "accept"
    DECLINE = "decline"

    @classmethod
    def parse(cls, value: Any, step: str = "") -> "Decision":
        if isinstance(value, bool):
            return cls.ACCEPT if value else cls.DECLINE
        text = str(value).strip().lower()
        if text in ("accept", "yes", "y", "true", "on"):
            return cls.ACCEPT
        if text in ("decline", "no", "n", "false", "off", "skip"):
            return cls.DECLINE
        raise ConfigError(
            f"Invalid decision '{value}' for step '{step}'",
            config_key=f"steps.{step}" if step else "steps",
            details="Expected 'accept' or 'decline'",
        )


def policy_accepts(policy: Optional[Dict[str, Decision]], step: str) -> bool:
    """Unattended decision for a step; steps missing from the policy are accepted."""
    if not policy:
        return True
    return policy.get(step, Decision.ACCEPT) is Decision.ACCEPT


def build_policy(
    base: Dict[str, Decision],
    accept: Iterable[str] = (),
    decline: Iterable[str] = (),
) -> Dict[str, Decision]:
    """Merge command-line overrides onto the config policy (decline wins)."""
    policy = dict(base)
    for name in accept:
        policy[name] = Decision.ACCEPT
    for name in decline:
        policy[name] = Decision.DECLINE
    return policy


def validate_policy(
    policy: Dict[str, Decision],
    known_steps: Iterable[str],
    fatal_steps: Iterable[str] = (),
):
    """Reject policy entries that name no known step or decline a mandatory one."""
    known = set(known_steps)
    unknown = sorted(name for name in policy if name not in known)
    if unknown:
        raise ConfigError(
            f"Unknown step(s) in policy: {', '.join(unknown)}",
            config_key="steps",
            remediation=f"Valid step names: {', '.join(sorted(known))}",
        )

    mandatory = sorted(
        name for name in set(fatal_steps)
        if policy.get(name) is Decision.DECLINE
    )
    if mandatory:
        raise ConfigError(
            f"Step(s) cannot be declined: {', '.join(mandatory)}",
            config_key=f"steps.{mandatory[0]}",
            remediation="Remove the decline; the run cannot continue without these steps",
        )
