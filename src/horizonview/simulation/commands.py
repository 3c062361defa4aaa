from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from horizonview.shader.parameters import COMPILE_TIME_PATHS, validate_value

if TYPE_CHECKING:
    from horizonview.shader.parameters import ShaderParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParameterChange:
    path: str
    value: Any


@dataclass(frozen=True, slots=True)
class AppliedChanges:
    """Paths whose value actually changed during one drain, in application order."""

    paths: tuple[str, ...] = ()

    @property
    def recompile(self) -> bool:
        return any(p in COMPILE_TIME_PATHS for p in self.paths)

    def __bool__(self) -> bool:
        return bool(self.paths)


class ParameterQueue:
    """FIFO of parameter changes from input handlers.

    Values are validated on ``put`` so a bad input is rejected at its source. The
    simulation step is the only consumer: ``apply`` drains the queue in order.
    """

    def __init__(self) -> None:
        self._pending: deque[ParameterChange] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def put(self, path: str, value: Any) -> None:
        """Queue ``path = value``. Raises ParameterError for unknown paths or bad values."""
        self._pending.append(ParameterChange(path, validate_value(path, value)))

    def pending_value(self, path: str, default: Any = None) -> Any:
        """Value of the last queued change to path, or default when none is queued."""
        for change in reversed(self._pending):
            if change.path == path:
                return change.value
        return default

    def apply(self, params: ShaderParameters) -> AppliedChanges:
        changed: list[str] = []
        while self._pending:
            change = self._pending.popleft()
            if params.get(change.path) == change.value:
                continue
            params.set(change.path, change.value)
            logger.debug("parameter %s = %r", change.path, change.value)
            if change.path not in changed:
                changed.append(change.path)
        return AppliedChanges(tuple(changed))

    def clear(self) -> None:
        self._pending.clear()
