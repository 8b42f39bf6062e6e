"""
词性 → motif 首音规则（firstNoteRule）。

定位：
- 规则表放在随包发布的 `data/motif_rules.yaml`，加载时严格校验（未知词性/非法音名直接失败）。
- 检查函数只返回“违规提示或 None”，不抛错；它是提交表单层面的提示性约束，存储层不强制。

约定：
- motif 为空白、词性缺省或不在规则表中：无违规。
- 取 motif 去掉首尾空白后的第一个字符（大写化）作为首音，与规则表要求的音名比较。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml


PARTS_OF_SPEECH = ("noun", "verb", "adjective", "adverb", "pronoun", "preposition", "conjunction")

RULES_PATH = Path(__file__).resolve().parent / "data" / "motif_rules.yaml"


@dataclass(frozen=True)
class MotifRules:
    first_note_by_part: dict[str, str]

    def required_first_note(self, part_of_speech: str | None) -> str | None:
        if not part_of_speech:
            return None
        return self.first_note_by_part.get(part_of_speech.strip().lower())


def _parse_rules(raw: Any) -> MotifRules:
    if not isinstance(raw, dict):
        raise ValueError("MotifRules: 顶层必须是 dict")
    rules = raw.get("rules")
    if not isinstance(rules, dict):
        raise ValueError("MotifRules: 缺少 rules dict")
    first_note = rules.get("first_note")
    if not isinstance(first_note, dict) or not first_note:
        raise ValueError("MotifRules: 缺少 rules.first_note dict")

    out: dict[str, str] = {}
    for part, letter in first_note.items():
        if part not in PARTS_OF_SPEECH:
            raise ValueError(f"MotifRules: 未知词性：{part!r}")
        if not isinstance(letter, str) or len(letter) != 1 or letter.upper() not in "ABCDEFG":
            raise ValueError(f"MotifRules: first_note[{part!r}] 必须是单个音名 A-G：{letter!r}")
        out[part] = letter.upper()
    return MotifRules(first_note_by_part=out)


def load_motif_rules_from_path(path: Path) -> MotifRules:
    if not path.exists():
        raise FileNotFoundError(f"缺少 motif 规则文件：{path}")
    return _parse_rules(yaml.safe_load(path.read_text(encoding="utf-8")))


@lru_cache(maxsize=1)
def load_motif_rules() -> MotifRules:
    return load_motif_rules_from_path(RULES_PATH)


def first_note_violation(motif: str | None, part_of_speech: str | None, *, rules: MotifRules | None = None) -> str | None:
    """返回形如 "Nouns must start with C" 的提示；无违规返回 None。"""

    text = (motif or "").strip()
    if not text:
        return None

    rules = rules or load_motif_rules()
    required = rules.required_first_note(part_of_speech)
    if required is None:
        return None

    if text[0].upper() == required:
        return None
    return f"{part_of_speech.strip().capitalize()}s must start with {required}"
