import logging
from typing import Any, Callable

from litestar.connection import ASGIConnection
from litestar.exceptions import PermissionDeniedException
from litestar.handlers.base import BaseRouteHandler

from ..core.model import Actions
from ._common import EnvBuilder

logger = logging.getLogger(__name__)


def require_permission(
    actions: Actions,
    build_env: EnvBuilder,
) -> Callable[[ASGIConnection, BaseRouteHandler], None]:
    """Litestar guard checking ``actions`` against the resource built for the connection.

    Usage::

        @get("/articles/{article_id:int}", guards=[require_permission("update", build_env)])
        def edit_article(article_id: int) -> dict: ...

    ``build_env(connection)`` returns ``(permissions, resource)``. A denial raises
    :class:`litestar.exceptions.PermissionDeniedException` (HTTP 403).
    """

    def _guard(connection: ASGIConnection, _handler: BaseRouteHandler) -> None:
        permissions, resource = build_env(connection)
        decision = permissions.check(actions, resource)
        if decision.allowed:
            return
        logger.debug("permission denied for %s (%s)", list(decision.actions), decision.reason)
        raise PermissionDeniedException(detail="Forbidden")

    return _guard


__all__ = ["require_permission"]
