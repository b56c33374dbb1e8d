from __future__ import annotations


class PolicyKitError(Exception):
    """Base class for every error raised by policykit."""


class ConfigurationError(PolicyKitError):
    """Structurally invalid policy, binding or gate invocation."""


class UnknownActionError(PolicyKitError):
    """A requested action has no rule in the bound policy."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"The [{action}] action could not be found.")


__all__ = ["PolicyKitError", "ConfigurationError", "UnknownActionError"]
