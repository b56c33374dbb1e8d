from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..adapters.render import Permission
from ..adapters.render import permission as _render_permission
from .errors import ConfigurationError, UnknownActionError
from .model import Actions, Decision, Policy, Rule, coerce_policy, normalize_actions
from .ports import DecisionLogSink, MetricsSink

logger = logging.getLogger("policykit.engine")


@dataclass(frozen=True)
class Permissions:
    """A policy bound to an optional subject.

    Evaluation is synchronous and side-effect free apart from the optional
    metrics and decision-log sinks. Rules are called as ``rule(subject, resource)``
    where ``subject`` is ``None`` when no user is bound.

    Errors (:class:`UnknownActionError`, :class:`ConfigurationError`, or anything a
    rule raises) propagate to the caller; no decision is reported for them.
    """

    policy: Policy
    subject: Any = None
    metrics: Optional[MetricsSink] = field(default=None, compare=False, repr=False)
    logger_sink: Optional[DecisionLogSink] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "policy", coerce_policy(self.policy))

    # -- public API -----------------------------------------------------------

    def check(self, actions: Actions, resource: Any) -> Decision:
        names = normalize_actions(actions)
        start = time.perf_counter()
        decision = self._decide(names, resource)
        self._report(decision, resource, time.perf_counter() - start)
        return decision

    def allows(self, actions: Actions, resource: Any) -> bool:
        return self.check(actions, resource).allowed

    def denies(self, actions: Actions, resource: Any) -> bool:
        return not self.allows(actions, resource)

    def permission(
        self,
        *,
        on: Any,
        children: Any,
        allows: Optional[Actions] = None,
        denies: Optional[Actions] = None,
    ) -> Any:
        """Return ``children`` when the check passes, ``None`` otherwise."""
        return _render_permission(self, allows=allows, denies=denies, on=on, children=children)

    def component(self) -> Permission:
        """Component-style gate: ``Permission(allows=..., on=..., children=...)``."""
        return Permission(self)

    # -- evaluation -----------------------------------------------------------

    def _decide(self, names: Tuple[str, ...], resource: Any) -> Decision:
        before = self.policy.before
        if before is not None:
            if self.subject is None:
                raise ConfigurationError("The [before] rule requires a bound subject.")
            # A granting `before` overrides the whole request; a falsy one only falls through.
            if before(self.subject, resource):
                return Decision(allowed=True, actions=names, reason="before")

        for action in names:
            rule = self._resolve(action)
            if not rule(self.subject, resource):
                return Decision(allowed=False, actions=names, reason="denied", failed_action=action)
        return Decision(allowed=True, actions=names, reason="rules")

    def _resolve(self, action: str) -> Rule:
        rule = self.policy.get(action)
        if rule is None:
            raise UnknownActionError(action)
        return rule

    # -- observability --------------------------------------------------------

    def _report(self, decision: Decision, resource: Any, elapsed: float) -> None:
        labels = {"decision": "allow" if decision.allowed else "deny"}
        if self.metrics is not None:
            try:
                self.metrics.inc("policykit_decisions_total", labels)
                self.metrics.observe("policykit_decision_seconds", elapsed, labels)
            except Exception:
                logger.debug("metrics sink failed", exc_info=True)

        if self.logger_sink is not None:
            payload: Dict[str, Any] = {
                "policy": self.policy.name,
                "actions": list(decision.actions),
                "allowed": decision.allowed,
                "reason": decision.reason,
                "failed_action": decision.failed_action,
                "duration_ms": round(elapsed * 1000.0, 3),
            }
            if getattr(self.logger_sink, "include_resource", False):
                payload["subject"] = self.subject
                payload["resource"] = resource
            try:
                self.logger_sink.log(payload)
            except Exception:
                logger.debug("decision log sink failed", exc_info=True)


def use_permission(
    policy: Union[Policy, Mapping[str, Rule]],
    for_user: Any = None,
    *,
    metrics: Optional[MetricsSink] = None,
    logger_sink: Optional[DecisionLogSink] = None,
) -> Permissions:
    """Bind ``policy`` to an optional user.

    Example::

        perms = use_permission(ArticlePolicy, for_user=current_user)
        if perms.allows(["update", "delete"], article):
            ...
    """
    return Permissions(policy, subject=for_user, metrics=metrics, logger_sink=logger_sink)


__all__ = ["Permissions", "use_permission"]
