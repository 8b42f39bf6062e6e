"""
词条（Word record）的显式类型与存储边界校验。

定位：
- 取代前后端之间“随手拼的 dict”：所有进入存储层的字段都先经过这里规范化/校验。
- 唯一键是小写化后的 word 文本（大小写不敏感唯一）。

约束：
- 空字符串的可选字段一律视为缺省（None）。
- motif 非空时必须满足字母表 `[A-Ga-g#*" ]`；首音规则只是提示性约束，这里不检查。
- 校验失败抛 ValueError（由 API 层映射为 400）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from motifnotation import alphabet_violation
from motifnotation.rules import PARTS_OF_SPEECH


WordStatus = Literal["queued", "accepted"]
WORD_STATUSES: tuple[str, ...] = ("queued", "accepted")

UPDATABLE_FIELDS = frozenset({"word", "part_of_speech", "motif", "mnemonic", "status"})

WORD_REQUIRED_MESSAGE = "Word is required"


@dataclass(frozen=True)
class WordRecord:
    id: int
    word: str
    part_of_speech: str | None
    motif: str | None
    mnemonic: str | None
    status: str
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "part_of_speech": self.part_of_speech,
            "motif": self.motif,
            "mnemonic": self.mnemonic,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "WordRecord":
        return cls(
            id=int(d["id"]),
            word=str(d["word"]),
            part_of_speech=d.get("part_of_speech"),
            motif=d.get("motif"),
            mnemonic=d.get("mnemonic"),
            status=str(d.get("status") or "queued"),
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
        )


@dataclass(frozen=True)
class WordDraft:
    """新词条提交（尚未入库，状态固定为 queued）。"""

    word: str
    part_of_speech: str | None = None
    motif: str | None = None
    mnemonic: str | None = None

    @classmethod
    def build(
        cls,
        *,
        word: str | None,
        part_of_speech: str | None = None,
        motif: str | None = None,
        mnemonic: str | None = None,
    ) -> "WordDraft":
        return cls(
            word=normalize_word_key(word),
            part_of_speech=normalize_part_of_speech(part_of_speech),
            motif=normalize_motif(motif),
            mnemonic=_optional_text(mnemonic),
        )


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def normalize_word_key(word: str | None) -> str:
    key = (word or "").strip().lower()
    if not key:
        raise ValueError(WORD_REQUIRED_MESSAGE)
    return key


def normalize_part_of_speech(part_of_speech: str | None) -> str | None:
    p = _optional_text(part_of_speech)
    if p is None:
        return None
    p = p.lower()
    if p not in PARTS_OF_SPEECH:
        raise ValueError(f"Unknown part of speech: {part_of_speech!r}")
    return p


def normalize_motif(motif: str | None) -> str | None:
    m = _optional_text(motif)
    if m is None:
        return None
    violation = alphabet_violation(m)
    if violation is not None:
        raise ValueError(violation)
    return m


def normalize_status(status: str | None) -> str:
    s = (_optional_text(status) or "").lower()
    if s not in WORD_STATUSES:
        raise ValueError(f"Unknown status: {status!r}")
    return s


def normalize_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """把一次部分更新的字段集合规范化；未知字段直接失败，不做静默忽略。"""

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown word fields: {sorted(unknown)!r}")

    out: dict[str, Any] = {}
    for key, value in changes.items():
        if key == "word":
            out[key] = normalize_word_key(value)
        elif key == "part_of_speech":
            out[key] = normalize_part_of_speech(value)
        elif key == "motif":
            out[key] = normalize_motif(value)
        elif key == "mnemonic":
            out[key] = _optional_text(value)
        else:
            out[key] = normalize_status(value)
    return out
