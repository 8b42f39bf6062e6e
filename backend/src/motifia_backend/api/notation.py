"""
记谱 API（/api/notation）：把 motif 文本解析并渲染为谱表。

- /svg：直接返回 image/svg+xml；
- /layout：返回 token 与几何布局（JSON），供前端自绘；
- /check：字母表校验与首音规则（提示性，返回违规原因或 null）。
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Query, Response
from pydantic import BaseModel

from motifnotation import (
    alphabet_violation,
    drawing_to_dict,
    first_note_violation,
    is_well_formed,
    layout_notation,
    parse_motif,
    render_motif_svg,
)


router = APIRouter()


class NotationCheckRequest(BaseModel):
    motif: str = ""
    part_of_speech: str | None = None


@router.get("/svg")
def api_notation_svg(motif: str = Query(default="")) -> Response:
    return Response(content=render_motif_svg(motif), media_type="image/svg+xml")


@router.get("/layout")
def api_notation_layout(motif: str = Query(default="")) -> dict[str, Any]:
    tokens = parse_motif(motif)
    return {
        "motif": motif,
        "tokens": [asdict(t) for t in tokens],
        "drawing": drawing_to_dict(layout_notation(tokens)),
    }


@router.post("/check")
def api_notation_check(req: NotationCheckRequest) -> dict[str, Any]:
    return {
        "motif": req.motif,
        "well_formed": is_well_formed(req.motif),
        "alphabet_violation": alphabet_violation(req.motif),
        "first_note_violation": first_note_violation(req.motif, req.part_of_speech),
        "tokens": [asdict(t) for t in parse_motif(req.motif)],
    }
