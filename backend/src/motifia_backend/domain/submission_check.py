"""
词条提交的就绪性诊断（面向提交表单 UI）。

定位：
- 表单在提交前需要一个统一的判断：“当前输入能否提交”，并给出不可提交的原因。
- blocking issues 会阻止提交；warnings 只提示（例如 motif 已被别的词占用），不阻止提交。

约束：
- 该模块只做诊断，不修改存储；重复性查询结果由调用方（API 或客户端）传入。
- 字母表校验与首音规则互斥显示：字母表不合法时不再检查首音规则。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motifnotation import alphabet_violation, first_note_violation
from motifnotation.rules import PARTS_OF_SPEECH

from .words import WORD_REQUIRED_MESSAGE, WordRecord


DUPLICATE_WORD_MESSAGE = "This word already exists in the database"
PART_OF_SPEECH_REQUIRED_MESSAGE = "Part of speech is required"
MOTIF_REQUIRED_MESSAGE = "Musical motif is required"


@dataclass(frozen=True)
class SubmissionIssue:
    field: str
    reason: str
    message: str


@dataclass(frozen=True)
class SubmissionStatus:
    ready: bool
    issues: list[SubmissionIssue]
    warnings: list[SubmissionIssue]


def motif_taken_message(word: str) -> str:
    return f'This motif is already assigned to "{word}"'


def check_submission(
    *,
    word: str | None,
    part_of_speech: str | None,
    motif: str | None,
    existing_word: WordRecord | None = None,
    motif_owner: WordRecord | None = None,
) -> SubmissionStatus:
    issues: list[SubmissionIssue] = []
    warnings: list[SubmissionIssue] = []

    key = (word or "").strip().lower()
    if not key:
        issues.append(SubmissionIssue(field="word", reason="word_required", message=WORD_REQUIRED_MESSAGE))
    elif existing_word is not None:
        issues.append(SubmissionIssue(field="word", reason="duplicate_word", message=DUPLICATE_WORD_MESSAGE))

    pos = (part_of_speech or "").strip().lower()
    if not pos:
        issues.append(
            SubmissionIssue(field="part_of_speech", reason="part_of_speech_required", message=PART_OF_SPEECH_REQUIRED_MESSAGE)
        )
    elif pos not in PARTS_OF_SPEECH:
        issues.append(
            SubmissionIssue(field="part_of_speech", reason="part_of_speech_unknown", message=f"Unknown part of speech: {part_of_speech!r}")
        )

    text = motif or ""
    alphabet = alphabet_violation(text)
    if alphabet is not None:
        issues.append(SubmissionIssue(field="motif", reason="motif_alphabet", message=alphabet))
    elif not text.strip():
        issues.append(SubmissionIssue(field="motif", reason="motif_required", message=MOTIF_REQUIRED_MESSAGE))
    else:
        rule = first_note_violation(text, pos or None)
        if rule is not None:
            issues.append(SubmissionIssue(field="motif", reason="motif_first_note", message=rule))
        if motif_owner is not None and motif_owner.word != key:
            warnings.append(SubmissionIssue(field="motif", reason="duplicate_motif", message=motif_taken_message(motif_owner.word)))

    return SubmissionStatus(ready=(len(issues) == 0), issues=issues, warnings=warnings)


def status_to_dict(status: SubmissionStatus) -> dict[str, Any]:
    return {
        "ready": status.ready,
        "issues": [{"field": i.field, "reason": i.reason, "message": i.message} for i in status.issues],
        "warnings": [{"field": w.field, "reason": w.reason, "message": w.message} for w in status.warnings],
    }
