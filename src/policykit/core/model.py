from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple, Union

from .errors import ConfigurationError

# A rule receives (subject, resource); subject is None when no user is bound.
Rule = Callable[[Any, Any], Any]

# A single action name or an ordered list of names combined with AND.
Actions = Union[str, Sequence[str]]

BEFORE = "before"


@dataclass(frozen=True, eq=False)
class Policy(Mapping):
    """Immutable table of authorization rules keyed by action name.

    The reserved ``before`` entry is an interception rule: when it grants,
    no other rule is consulted.

    >>> ArticlePolicy = Policy({"update": lambda user, article: user["id"] == article["author_id"]})
    """

    rules: Mapping[str, Rule] = field(default_factory=dict)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.rules, Mapping):
            raise ConfigurationError(
                f"Policy rules must be a mapping of action name to rule, got {type(self.rules).__name__}"
            )
        table: dict[str, Rule] = {}
        for action, rule in self.rules.items():
            if not isinstance(action, str) or not action:
                raise ConfigurationError(f"Policy action names must be non-empty strings, got {action!r}")
            if not callable(rule):
                raise ConfigurationError(f"Rule for action [{action}] is not callable")
            table[action] = rule
        object.__setattr__(self, "rules", MappingProxyType(table))

    @classmethod
    def of(cls, name: Optional[str] = None, **rules: Rule) -> "Policy":
        """Build a policy from keyword arguments: ``Policy.of(update=..., delete=...)``."""
        return cls(rules, name=name)

    @property
    def before(self) -> Optional[Rule]:
        return self.rules.get(BEFORE)

    def __getitem__(self, action: str) -> Rule:
        return self.rules[action]

    def __iter__(self) -> Iterator[str]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"Policy(name={self.name!r}, actions={list(self.rules)!r})"


def coerce_policy(policy: Any) -> Policy:
    if isinstance(policy, Policy):
        return policy
    if isinstance(policy, Mapping):
        return Policy(policy)
    raise ConfigurationError(f"Expected a Policy or a mapping of rules, got {type(policy).__name__}")


def normalize_actions(actions: Actions) -> Tuple[str, ...]:
    """Turn an action specifier into an ordered tuple of action names."""
    if isinstance(actions, str):
        names: Tuple[Any, ...] = (actions,)
    elif isinstance(actions, (list, tuple)):
        names = tuple(actions)
    else:
        raise ConfigurationError(
            f"Actions must be a string or a list of strings, got {type(actions).__name__}"
        )
    if not names:
        raise ConfigurationError("At least one action is required")
    for name in names:
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Action names must be non-empty strings, got {name!r}")
    return names


@dataclass(frozen=True)
class Decision:
    allowed: bool
    actions: Tuple[str, ...] = ()
    reason: str = "rules"  # before|rules|denied
    failed_action: Optional[str] = None


__all__ = ["Rule", "Actions", "BEFORE", "Policy", "Decision", "coerce_policy", "normalize_actions"]
