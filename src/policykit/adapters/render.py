from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Iterable, List, Optional

from ..core.errors import ConfigurationError
from ..core.model import Actions

if TYPE_CHECKING:  # pragma: no cover
    from ..core.engine import Permissions


def permission(
    permissions: "Permissions",
    *,
    on: Any,
    children: Any,
    allows: Optional[Actions] = None,
    denies: Optional[Actions] = None,
) -> Any:
    """Conditionally include ``children``.

    Exactly one of ``allows`` / ``denies`` must be given. Returns ``children``
    unchanged when the check passes and ``None`` (render nothing) otherwise.
    Nothing is memoized: every call evaluates the policy again.
    """
    if allows is None and denies is None:
        raise ConfigurationError("Missing actions for Permission: pass either allows= or denies=")
    if allows is not None and denies is not None:
        raise ConfigurationError("Permission accepts allows= or denies=, not both")

    if allows is not None:
        should_render = permissions.allows(allows, on)
    else:
        should_render = permissions.denies(denies, on)  # type: ignore[arg-type]

    return children if should_render else None


class Permission:
    """Component-style render gate bound to a :class:`Permissions` value.

    Call it with props, either as keywords or as a single mapping::

        Permission = perms.component()
        Permission(allows=["update", "delete"], on=article, children=settings_button)
        Permission({"denies": "delete", "on": article, "children": notice})
    """

    _PROPS = ("allows", "denies", "on", "children")

    def __init__(self, permissions: "Permissions") -> None:
        self.permissions = permissions

    def __call__(self, props: Optional[Mapping] = None, **kwargs: Any) -> Any:
        merged = dict(props or {})
        merged.update(kwargs)
        unknown = set(merged) - set(self._PROPS)
        if unknown:
            raise ConfigurationError(f"Unknown Permission props: {sorted(unknown)}")
        if "on" not in merged:
            raise ConfigurationError("Permission requires the resource prop: on=")
        return permission(
            self.permissions,
            allows=merged.get("allows"),
            denies=merged.get("denies"),
            on=merged["on"],
            children=merged.get("children"),
        )


def render_children(gated: Iterable[Any]) -> List[Any]:
    """Flatten gate outputs for a presentation layer, dropping the "nothing" entries."""
    return [node for node in gated if node is not None]


__all__ = ["permission", "Permission", "render_children"]
