"""
音名 → 五线谱纵坐标（y）映射。

定位：
- 渲染器的唯一位置来源；七个基准坐标是一套固定的视觉校准表，不是公式推导，必须原样保留。
- y 越小位置越高；C 位于“中间”位置（y=60），D..B 依次上移 5 个单位。

约定：
- 每个八度移位固定 35 个单位（与音名间距无关）：y = base - 35 * octave_shift。
- 符干方向阈值：y <= 50（中线及以上）符干朝下。

边界：
- 未知音名（解析器不会产生，仅防御性处理）回落到默认位置 y=60，且不带升号；只记 warning，不抛错。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .grammar import NoteToken


logger = logging.getLogger(__name__)


STEP_TO_STAFF_Y = {
    "C": 60,
    "D": 55,
    "E": 50,
    "F": 45,
    "G": 40,
    "A": 35,
    "B": 30,
}

DEFAULT_STAFF_Y = STEP_TO_STAFF_Y["C"]
OCTAVE_STEP = 35
STEM_THRESHOLD_Y = 50
STAFF_LINE_YS = (30, 40, 50, 60, 70)


@dataclass(frozen=True)
class StaffPosition:
    """一个音符在谱表上的纵向位置（已计入八度移位）。"""

    y: int
    sharp: bool

    @property
    def stem_down(self) -> bool:
        return self.y <= STEM_THRESHOLD_Y


def staff_position(token: NoteToken) -> StaffPosition:
    base = STEP_TO_STAFF_Y.get(token.letter.strip().upper())
    if base is None:
        logger.warning("Invalid note: %r, falling back to middle C", token.letter)
        return StaffPosition(y=DEFAULT_STAFF_Y, sharp=False)
    return StaffPosition(y=base - OCTAVE_STEP * int(token.octave_shift), sharp=token.sharp)
