from .engine import Permissions, use_permission
from .errors import ConfigurationError, PolicyKitError, UnknownActionError
from .model import Actions, Decision, Policy, Rule

__all__ = [
    "Permissions",
    "use_permission",
    "Policy",
    "Rule",
    "Actions",
    "Decision",
    "PolicyKitError",
    "ConfigurationError",
    "UnknownActionError",
]
