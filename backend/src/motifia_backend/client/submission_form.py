"""
“添加词条”表单：显式的局部表单状态 + 防抖的重复性检查。

流程：
- 输入变更（on_*_changed）立即更新表单状态；同步的字母表/首音规则检查随时可算，不防抖；
- word / motif 的“是否已被占用”需要访问后端，走 DebouncedCheck（静止 0.5s 后才查询）；
- status() 只采用与当前输入一致的查询结果，过期结果视为未知；
- submit() 先等待挂起的检查结束，再整体诊断，通过后才创建词条（新词条进入 queued 队列）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from motifnotation import is_well_formed

from ..domain.submission_check import SubmissionStatus, check_submission
from ..domain.words import WordRecord
from .api_client import MotifiaClient
from .debounce import DEFAULT_DEBOUNCE_SECONDS, DebouncedCheck


logger = logging.getLogger(__name__)


@dataclass
class SubmissionForm:
    word: str = ""
    part_of_speech: str = ""
    motif: str = ""
    mnemonic: str = ""

    def reset(self) -> None:
        self.word = ""
        self.part_of_speech = ""
        self.motif = ""
        self.mnemonic = ""


def _record_or_none(d: dict[str, Any] | None) -> WordRecord | None:
    return WordRecord.from_dict(d) if d is not None else None


class SubmissionWatcher:
    def __init__(self, form: SubmissionForm, client: MotifiaClient, *, delay: float = DEFAULT_DEBOUNCE_SECONDS) -> None:
        self.form = form
        self.client = client
        self.word_check: DebouncedCheck[WordRecord | None] = DebouncedCheck(self._lookup_word, delay=delay)
        self.motif_check: DebouncedCheck[WordRecord | None] = DebouncedCheck(self._lookup_motif, delay=delay)

    async def _lookup_word(self, word: str) -> WordRecord | None:
        return _record_or_none(await self.client.get_by_word(word))

    async def _lookup_motif(self, motif: str) -> WordRecord | None:
        return _record_or_none(await self.client.get_by_motif(motif))

    def on_word_changed(self, value: str) -> None:
        self.form.word = value.lower()
        key = self.form.word.strip()
        if not key:
            self.word_check.cancel()
            return
        self.word_check.submit(key)

    def on_motif_changed(self, value: str) -> None:
        self.form.motif = value
        motif = value.strip()
        # 字母表不合法时没有必要查询占用情况
        if not motif or not is_well_formed(value):
            self.motif_check.cancel()
            return
        self.motif_check.submit(motif)

    def on_part_of_speech_changed(self, value: str) -> None:
        self.form.part_of_speech = value

    def on_mnemonic_changed(self, value: str) -> None:
        self.form.mnemonic = value

    async def settle(self) -> None:
        """等到两个检查都没有挂起任务；等待期间的新输入会开启新一轮检查，继续等。"""

        while self.word_check.pending or self.motif_check.pending:
            await self.word_check.wait()
            await self.motif_check.wait()

    def _current(self, check: DebouncedCheck[WordRecord | None], value: str) -> WordRecord | None:
        latest = check.latest
        if latest is None or latest[0] != value:
            return None
        return latest[1]

    def status(self) -> SubmissionStatus:
        return check_submission(
            word=self.form.word,
            part_of_speech=self.form.part_of_speech,
            motif=self.form.motif,
            existing_word=self._current(self.word_check, self.form.word.strip()),
            motif_owner=self._current(self.motif_check, self.form.motif.strip()),
        )

    async def submit(self) -> dict[str, Any]:
        await self.settle()
        st = self.status()
        if not st.ready:
            raise ValueError("; ".join(i.message for i in st.issues))

        created = await self.client.create_word(
            word=self.form.word.strip(),
            part_of_speech=self.form.part_of_speech,
            motif=self.form.motif.strip(),
            mnemonic=self.form.mnemonic or None,
        )
        logger.info("Submitted word for review: %s", created.get("word"))
        self.form.reset()
        self.word_check.cancel()
        self.motif_check.cancel()
        return created
