"""
Motifia 的“动机（motif）记谱”微语言：解析、校验与五线谱渲染。

定位：
- 本包只放纯函数式的记谱逻辑（不依赖 Web 框架、数据库或会话）。
- 后端 API 与客户端表单都调用这里的函数；规则表（词性 → 首音）以 YAML 形式随包发布。

约束：
- 解析器与渲染器不因输入内容抛错：非法字符丢弃、未知音名回落到默认位置。
- 字母表校验（宽松正则）与 token 级解析（严格、以字母为锚）是两套独立检查，刻意不合并。
"""

from .grammar import (
    INVALID_ALPHABET_MESSAGE,
    NoteToken,
    alphabet_violation,
    is_well_formed,
    iter_note_tokens,
    parse_motif,
)
from .render import (
    BASE_WIDTH,
    CANVAS_HEIGHT,
    NOTE_SPACING,
    NotationDrawing,
    NotationStyle,
    NoteGlyph,
    SharpGlyph,
    StaffLine,
    canvas_width,
    drawing_to_dict,
    layout_notation,
    render_motif_svg,
    render_svg,
)
from .rules import MotifRules, first_note_violation, load_motif_rules
from .staff import DEFAULT_STAFF_Y, OCTAVE_STEP, STAFF_LINE_YS, STEM_THRESHOLD_Y, STEP_TO_STAFF_Y, StaffPosition, staff_position

__all__ = [
    "BASE_WIDTH",
    "CANVAS_HEIGHT",
    "DEFAULT_STAFF_Y",
    "INVALID_ALPHABET_MESSAGE",
    "MotifRules",
    "NOTE_SPACING",
    "NotationDrawing",
    "NotationStyle",
    "NoteGlyph",
    "NoteToken",
    "OCTAVE_STEP",
    "STAFF_LINE_YS",
    "STEM_THRESHOLD_Y",
    "STEP_TO_STAFF_Y",
    "SharpGlyph",
    "StaffLine",
    "StaffPosition",
    "alphabet_violation",
    "canvas_width",
    "drawing_to_dict",
    "first_note_violation",
    "is_well_formed",
    "iter_note_tokens",
    "layout_notation",
    "load_motif_rules",
    "parse_motif",
    "render_motif_svg",
    "render_svg",
    "staff_position",
]
