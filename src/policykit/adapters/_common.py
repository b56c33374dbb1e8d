from __future__ import annotations

from typing import Any, Callable, Tuple

from ..core.engine import Permissions

# Maps a framework request/connection to the bound permissions and the resource to check.
EnvBuilder = Callable[[Any], Tuple[Permissions, Any]]

__all__ = ["EnvBuilder"]
