"""
防抖检查任务：用户每次输入都重新计时，静止 `delay` 秒后才发出一次检查请求。

约束：
- 每个 DebouncedCheck 同一时刻最多只有一个挂起任务；新的 submit() 会取消旧任务（包括已在途的请求）。
- 结果按“代次”发布：只有最新一次 submit 的结果会写入 latest / 触发回调，被取代的结果直接丢弃，
  因此结果永远不会乱序生效。
- 解析/校验本身是同步纯函数，不参与防抖；这里只负责需要访问后端的检查。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DEBOUNCE_SECONDS = 0.5


class DebouncedCheck(Generic[T]):
    def __init__(
        self,
        check: Callable[[str], Awaitable[T]],
        *,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        on_result: Callable[[str, T], None] | None = None,
    ) -> None:
        self._check = check
        self._delay = delay
        self._on_result = on_result
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._latest: tuple[str, T] | None = None

    @property
    def latest(self) -> tuple[str, T] | None:
        """最近一次生效的 (输入值, 结果)。"""
        return self._latest

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, value: str) -> None:
        """记录一次输入；必须在事件循环内调用。"""

        self.cancel()
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(self._run(self._generation, value))

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
        elif not task.cancelled() and task.exception() is not None:
            # 被替换的失败任务：取走异常并记录
            logger.warning("Discarding failed check: %r", task.exception())

    async def wait(self) -> None:
        """等待当前挂起的检查结束（被取消也视为结束）。"""

        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self, generation: int, value: str) -> None:
        await asyncio.sleep(self._delay)
        try:
            result = await self._check(value)
        except Exception as e:
            if generation != self._generation:
                logger.warning("Superseded check for %r failed: %s", value, e)
                return
            raise
        if generation != self._generation:
            logger.debug("Discarding superseded check result for %r", value)
            return
        self._latest = (value, result)
        if self._on_result is not None:
            self._on_result(value, result)
