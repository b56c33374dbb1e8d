from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from ..core.model import Actions, Decision
from ._common import EnvBuilder


def _deny_headers(decision: Decision, add_headers: bool) -> dict[str, str]:
    if not add_headers:
        return {}
    headers = {"X-PolicyKit-Reason": decision.reason}
    if decision.failed_action:
        headers["X-PolicyKit-Action"] = decision.failed_action
    return headers


def require_permission(
    actions: Actions,
    build_env: EnvBuilder,
    add_headers: bool = False,
) -> Callable[..., Any]:
    """
    Starlette adapter that works both:
      - as a decorator on an endpoint (returns an async endpoint)
      - as a dependency-like callable: `dep = require_permission(...); await dep(request)`

    `build_env(request)` returns `(permissions, resource)`. Denials become
    `403 {"detail": "Forbidden"}`; policy errors propagate.
    """

    async def _dependency(request: Any) -> Optional[JSONResponse]:
        permissions, resource = build_env(request)
        decision = permissions.check(actions, resource)
        if decision.allowed:
            return None
        return JSONResponse(
            {"detail": "Forbidden"},
            status_code=403,
            headers=_deny_headers(decision, add_headers),
        )

    def _decorator_or_dependency(arg: Any) -> Any:
        # A callable argument is the endpoint being decorated.
        if callable(arg):
            handler = arg

            if inspect.iscoroutinefunction(handler):

                @functools.wraps(handler)
                async def _endpoint_async(request: Any) -> Any:
                    deny = await _dependency(request)
                    if deny is not None:
                        return deny
                    return await handler(request)

                return _endpoint_async

            @functools.wraps(handler)
            async def _endpoint_sync(request: Any) -> Any:
                deny = await _dependency(request)
                if deny is not None:
                    return deny
                return await run_in_threadpool(handler, request)

            return _endpoint_sync

        # Otherwise act as a dependency: `arg` is the request.
        return _dependency(arg)

    return _decorator_or_dependency


__all__ = ["require_permission"]
