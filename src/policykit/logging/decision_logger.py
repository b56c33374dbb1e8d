from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict

from ..core.ports import DecisionLogSink


class DecisionLogger(DecisionLogSink):
    """DecisionLogSink that writes decisions to a stdlib logger.

    - ``sample_rate`` in [0, 1]; values outside the range are clamped.
    - ``as_json`` serializes payloads with ``json.dumps`` (non-JSON values via ``repr``),
      otherwise messages look like ``decision {...}``.
    - ``include_resource`` asks the engine to add ``subject`` and ``resource`` to the
      payload. Off by default since both may carry personal data.
    """

    def __init__(
        self,
        *,
        sample_rate: float = 1.0,
        level: int = logging.INFO,
        as_json: bool = False,
        logger_name: str = "policykit.audit",
        include_resource: bool = False,
    ) -> None:
        self.sample_rate = min(1.0, max(0.0, float(sample_rate)))
        self.level = level
        self.as_json = as_json
        self.include_resource = include_resource
        self.logger = logging.getLogger(logger_name)

    def _sampled(self) -> bool:
        if self.sample_rate >= 1.0:
            return True
        if self.sample_rate <= 0.0:
            return False
        return random.random() < self.sample_rate

    def log(self, payload: Dict[str, Any]) -> None:
        if not self._sampled():
            return
        if self.as_json:
            msg = json.dumps(payload, default=repr, sort_keys=True)
        else:
            msg = f"decision {payload}"
        self.logger.log(self.level, msg)


__all__ = ["DecisionLogger"]
