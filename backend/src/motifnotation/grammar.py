"""
motif 文本 → 音符 token 序列（解析器），以及提交表单使用的字母表校验。

文法：
- token 以字母 A–G（大小写不敏感）开始；
- 其后的修饰符 `#`（升号）、`*`（高八度）、`"`（低八度）都挂到当前 token 上，直到下一个字母或串尾；
- 其他任何字符（包括空格）直接丢弃，且不会结束当前 token。

边界：
- 出现在第一个字母之前的修饰符没有可挂靠的 token，丢弃。
- 同一音符上多个 `*` / `"` 全部计数：octave_shift = count('*') - count('"')。
- 多个 `#` 仍只表示一个升号。
- 解析从不抛错；空串或全非法输入得到空序列。

字母表校验（`is_well_formed`）刻意比解析器宽松：它只检查每个字符是否属于 `[A-Ga-g#*" ]`，
因此 `"#"` 这类没有字母的修饰符可以通过校验，却解析不出任何 token。两者保持独立。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator


NOTE_LETTERS = frozenset("ABCDEFG")

SHARP = "#"
OCTAVE_UP = "*"
OCTAVE_DOWN = '"'
MODIFIERS = frozenset((SHARP, OCTAVE_UP, OCTAVE_DOWN))

MOTIF_ALPHABET_RE = re.compile(r'[A-Ga-g#*" ]*')

INVALID_ALPHABET_MESSAGE = 'Only use letters A-G, #, *, and " for notation'


@dataclass(frozen=True)
class NoteToken:
    """一个解析出的音符（不可变）。"""

    letter: str
    sharp: bool = False
    octave_shift: int = 0

    def to_text(self) -> str:
        """规范化文本形式：字母 + 升号 + 八度记号。"""

        marks = OCTAVE_UP * self.octave_shift if self.octave_shift > 0 else OCTAVE_DOWN * -self.octave_shift
        return f"{self.letter}{SHARP if self.sharp else ''}{marks}"


def iter_note_tokens(motif: str | None) -> Iterator[NoteToken]:
    letter: str | None = None
    sharp = False
    shift = 0

    for ch in motif or "":
        upper = ch.upper()
        if upper in NOTE_LETTERS:
            if letter is not None:
                yield NoteToken(letter=letter, sharp=sharp, octave_shift=shift)
            letter, sharp, shift = upper, False, 0
            continue
        if letter is None or ch not in MODIFIERS:
            continue
        if ch == SHARP:
            sharp = True
        elif ch == OCTAVE_UP:
            shift += 1
        else:
            shift -= 1

    if letter is not None:
        yield NoteToken(letter=letter, sharp=sharp, octave_shift=shift)


def parse_motif(motif: str | None) -> tuple[NoteToken, ...]:
    """解析 motif 文本为有序、有限的 token 元组（可重复调用，结果一致）。"""

    return tuple(iter_note_tokens(motif))


def is_well_formed(motif: str | None) -> bool:
    return MOTIF_ALPHABET_RE.fullmatch(motif or "") is not None


def alphabet_violation(motif: str | None) -> str | None:
    """字母表违规时返回提示文本，否则 None。"""

    if is_well_formed(motif):
        return None
    return INVALID_ALPHABET_MESSAGE
