"""그리기 작업 큐 모듈 — 지연 그리기 작업을 순서대로 실행하고 결과를 모은다."""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from errors import RenderError

logger = logging.getLogger(__name__)


@dataclass
class TaskOutcome:
    """작업 하나의 결과."""
    label: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RenderReport:
    """render() 한 번의 작업 결과와 경고를 모은다."""
    outcomes: list[TaskOutcome] = field(default_factory=list)
    advisories: list[str] = field(default_factory=list)

    @property
    def failures(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures

    def advise(self, message: str) -> None:
        """치명적이지 않은 경고를 기록한다."""
        logger.warning(message)
        self.advisories.append(message)

    def fail(self, label: str, error: BaseException) -> None:
        logger.error("%s 실패: %s", label, error)
        self.outcomes.append(TaskOutcome(label, error))

    def raise_for_errors(self) -> None:
        """실패한 작업이 있으면 RenderError."""
        failures = self.failures
        if failures:
            raise RenderError(failures)


class DrawQueue:
    """FIFO 그리기 작업 큐.

    schedule()은 작업을 쌓기만 하고, drain()이 쌓인 순서대로 실행한다.
    각 작업 전에 이벤트 루프에 한 번 양보한다.
    """

    def __init__(self):
        self._pending: deque[tuple[str, Callable, tuple]] = deque()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, label: str, fn: Callable, *args) -> None:
        self._pending.append((label, fn, args))

    async def drain(self) -> list[TaskOutcome]:
        """쌓인 작업을 모두 실행한다. 실패한 작업도 결과로 남기고 계속 진행한다."""
        outcomes = []
        while self._pending:
            label, fn, args = self._pending.popleft()
            await asyncio.sleep(0)
            try:
                fn(*args)
            except Exception as e:
                logger.error("그리기 작업 실패 [%s]: %s", label, e)
                outcomes.append(TaskOutcome(label, e))
            else:
                outcomes.append(TaskOutcome(label))
        return outcomes
