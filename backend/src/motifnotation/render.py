"""
音符 token 序列 → 谱表绘图（布局）→ SVG 文本。

定位：
- `layout_notation` 只做几何计算，输出结构化的 `NotationDrawing`（便于 API 以 JSON 返回、便于测试）；
- `render_svg` 把绘图序列化为 SVG（xml.etree），前端可直接内嵌。

画布约定：
- 高度固定 100；宽度 = BASE_WIDTH + N * NOTE_SPACING（N=0 时即最小宽度 BASE_WIDTH）。
- 五条谱线 y = 30/40/50/60/70，横向从 x=10 到 width-10。
- 第 i 个音符的符头中心 x = 100 + 50*i，按解析顺序从左到右排列。

符干规则（与常规记谱一致，方向与左右一起翻转）：
- y <= 50：符干画在符头左侧（x-7），自 y-2 向下延伸到 y+37；
- y > 50：符干画在符头右侧（x+7），自 y-2 向上延伸到 y-37。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable
import xml.etree.ElementTree as ET

from .grammar import NoteToken, parse_motif
from .staff import STAFF_LINE_YS, staff_position


SVG_NS = "http://www.w3.org/2000/svg"

CANVAS_HEIGHT = 100
BASE_WIDTH = 150
NOTE_SPACING = 50

STAFF_MARGIN_X = 10
FIRST_NOTE_X = 100

NOTEHEAD_RX = 8
NOTEHEAD_RY = 6
NOTEHEAD_ROTATE = -20

STEM_OFFSET_X = 7
STEM_LENGTH = 37
STEM_WIDTH = 2

SHARP_OFFSET_X = -38
SHARP_SIZE = 40


@dataclass(frozen=True)
class StaffLine:
    y: int
    x1: int
    x2: int


@dataclass(frozen=True)
class ClefGlyph:
    x: int = -25
    y: int = -17
    width: int = 120
    height: int = 120
    rotate: int = -10
    rotate_cx: int = 40
    rotate_cy: int = 50


@dataclass(frozen=True)
class SharpGlyph:
    """升号图形：位于符头左侧，与符头纵向对齐。"""

    x: int
    y: int
    width: int = SHARP_SIZE
    height: int = SHARP_SIZE


@dataclass(frozen=True)
class NoteGlyph:
    index: int
    text: str
    x: int
    y: int
    sharp: bool
    stem_down: bool
    stem_x: int
    stem_y1: int
    stem_y2: int


@dataclass(frozen=True)
class NotationDrawing:
    width: int
    height: int
    staff_lines: tuple[StaffLine, ...]
    clef: ClefGlyph
    notes: tuple[NoteGlyph, ...]
    sharps: tuple[SharpGlyph, ...]


@dataclass(frozen=True)
class NotationStyle:
    """渲染风格。提供 href 时谱号/升号以 <image> 输出，否则用 Unicode 字形。"""

    clef_href: str | None = None
    sharp_href: str | None = None
    color: str = "black"


def canvas_width(note_count: int) -> int:
    return BASE_WIDTH + max(0, int(note_count)) * NOTE_SPACING


def layout_notation(tokens: Iterable[NoteToken]) -> NotationDrawing:
    notes: list[NoteGlyph] = []
    sharps: list[SharpGlyph] = []

    for i, token in enumerate(tokens):
        pos = staff_position(token)
        x = FIRST_NOTE_X + i * NOTE_SPACING
        if pos.stem_down:
            stem_x, stem_y2 = x - STEM_OFFSET_X, pos.y + STEM_LENGTH
        else:
            stem_x, stem_y2 = x + STEM_OFFSET_X, pos.y - STEM_LENGTH
        notes.append(
            NoteGlyph(
                index=i,
                text=token.to_text(),
                x=x,
                y=pos.y,
                sharp=pos.sharp,
                stem_down=pos.stem_down,
                stem_x=stem_x,
                stem_y1=pos.y - 2,
                stem_y2=stem_y2,
            )
        )
        if pos.sharp:
            sharps.append(SharpGlyph(x=x + SHARP_OFFSET_X, y=pos.y - SHARP_SIZE // 2))

    width = canvas_width(len(notes))
    lines = tuple(StaffLine(y=y, x1=STAFF_MARGIN_X, x2=width - STAFF_MARGIN_X) for y in STAFF_LINE_YS)
    return NotationDrawing(
        width=width,
        height=CANVAS_HEIGHT,
        staff_lines=lines,
        clef=ClefGlyph(),
        notes=tuple(notes),
        sharps=tuple(sharps),
    )


def drawing_to_dict(drawing: NotationDrawing) -> dict[str, Any]:
    return asdict(drawing)


def _image(parent: ET.Element, href: str, *, x: int, y: int, width: int, height: int, transform: str | None = None) -> None:
    attrs = {"href": href, "x": str(x), "y": str(y), "width": str(width), "height": str(height)}
    if transform:
        attrs["transform"] = transform
    ET.SubElement(parent, "image", attrs)


def render_svg(drawing: NotationDrawing, style: NotationStyle | None = None) -> str:
    style = style or NotationStyle()
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(drawing.width),
            "height": str(drawing.height),
            "viewBox": f"0 0 {drawing.width} {drawing.height}",
        },
    )

    staff = ET.SubElement(root, "g", {"class": "staff"})
    for line in drawing.staff_lines:
        ET.SubElement(
            staff,
            "line",
            {
                "x1": str(line.x1),
                "y1": str(line.y),
                "x2": str(line.x2),
                "y2": str(line.y),
                "stroke": style.color,
                "stroke-width": "1",
            },
        )

    clef = drawing.clef
    clef_transform = f"rotate({clef.rotate}, {clef.rotate_cx}, {clef.rotate_cy})"
    if style.clef_href:
        _image(root, style.clef_href, x=clef.x, y=clef.y, width=clef.width, height=clef.height, transform=clef_transform)
    else:
        # 无素材时用 Unicode 高音谱号，基线落在最下一条谱线附近
        glyph = ET.SubElement(
            root,
            "text",
            {"class": "clef", "x": "12", "y": "78", "font-size": "64", "fill": style.color},
        )
        glyph.text = "\U0001D11E"

    for sharp in drawing.sharps:
        if style.sharp_href:
            _image(root, style.sharp_href, x=sharp.x, y=sharp.y, width=sharp.width, height=sharp.height)
            continue
        glyph = ET.SubElement(
            root,
            "text",
            {
                "class": "sharp",
                "x": str(sharp.x + sharp.width // 2),
                "y": str(sharp.y + sharp.height * 3 // 4),
                "font-size": "28",
                "text-anchor": "middle",
                "fill": style.color,
            },
        )
        glyph.text = "♯"

    for note in drawing.notes:
        g = ET.SubElement(root, "g", {"class": "note", "data-note": note.text})
        ET.SubElement(
            g,
            "ellipse",
            {
                "cx": str(note.x),
                "cy": str(note.y),
                "rx": str(NOTEHEAD_RX),
                "ry": str(NOTEHEAD_RY),
                "transform": f"rotate({NOTEHEAD_ROTATE}, {note.x}, {note.y})",
                "fill": style.color,
            },
        )
        ET.SubElement(
            g,
            "line",
            {
                "x1": str(note.stem_x),
                "y1": str(note.stem_y1),
                "x2": str(note.stem_x),
                "y2": str(note.stem_y2),
                "stroke": style.color,
                "stroke-width": str(STEM_WIDTH),
            },
        )

    return ET.tostring(root, encoding="unicode")


def render_motif_svg(motif: str | None, style: NotationStyle | None = None) -> str:
    """parse → layout → svg 的便捷组合。"""

    return render_svg(layout_notation(parse_motif(motif)), style)
