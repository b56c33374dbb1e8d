from importlib.metadata import PackageNotFoundError, version

from . import adapters, core
from .adapters.render import Permission, permission, render_children
from .core.engine import Permissions, use_permission
from .core.errors import ConfigurationError, PolicyKitError, UnknownActionError
from .core.model import Actions, Decision, Policy, Rule
from .logging.decision_logger import DecisionLogger

try:
    __version__ = version("policykit")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "Policy",
    "Rule",
    "Actions",
    "Decision",
    "Permissions",
    "use_permission",
    "Permission",
    "permission",
    "render_children",
    "DecisionLogger",
    "PolicyKitError",
    "ConfigurationError",
    "UnknownActionError",
    "core",
    "adapters",
    "__version__",
]
