"""
词条 API（/api/words）。

约定：
- 读接口与提交接口（POST，新词条固定为 queued）对所有人开放；
- 修改、审核通过、删除只允许白名单管理员（见 deps.require_admin）。
- 存储边界的校验失败（ValueError）→ 400；不存在 → 404；唯一键冲突 → 409。
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, ConfigDict

from motifnotation import render_motif_svg

from ..domain.submission_check import check_submission, status_to_dict
from ..domain.words import WordDraft
from ..infra.word_store import WordConflictError, WordNotFoundError, WordStore
from .deps import get_store, require_admin


router = APIRouter()

WORD_NOT_FOUND = "Word not found"

# 词条没有 motif 时，详情页的谱表默认画一个中央 C
DEFAULT_DETAIL_MOTIF = "C"


class CreateWordRequest(BaseModel):
    word: str = ""
    part_of_speech: str | None = None
    motif: str | None = None
    mnemonic: str | None = None


class UpdateWordRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    word: str | None = None
    part_of_speech: str | None = None
    motif: str | None = None
    mnemonic: str | None = None
    status: str | None = None


class CheckSubmissionRequest(BaseModel):
    word: str | None = None
    part_of_speech: str | None = None
    motif: str | None = None


@router.get("")
def api_list_words(
    status: str | None = Query(default=None),
    q: str | None = Query(default=None),
    part_of_speech: str | None = Query(default=None),
    store: WordStore = Depends(get_store),
) -> list[dict[str, Any]]:
    try:
        return [w.to_dict() for w in store.list_words(status=status, q=q, part_of_speech=part_of_speech)]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/word/{word}")
def api_get_word_by_key(word: str, store: WordStore = Depends(get_store)) -> dict[str, Any]:
    record = store.get_by_key(word)
    if record is None:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND)
    return record.to_dict()


@router.get("/motif/{motif}")
def api_get_word_by_motif(motif: str, store: WordStore = Depends(get_store)) -> dict[str, Any]:
    record = store.get_by_motif(motif)
    if record is None:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND)
    return record.to_dict()


@router.post("/check")
def api_check_submission(req: CheckSubmissionRequest, store: WordStore = Depends(get_store)) -> dict[str, Any]:
    status = check_submission(
        word=req.word,
        part_of_speech=req.part_of_speech,
        motif=req.motif,
        existing_word=store.get_by_key(req.word or ""),
        motif_owner=store.get_by_motif(req.motif or ""),
    )
    return status_to_dict(status)


@router.post("", status_code=201)
def api_create_word(req: CreateWordRequest, store: WordStore = Depends(get_store)) -> dict[str, Any]:
    try:
        draft = WordDraft.build(word=req.word, part_of_speech=req.part_of_speech, motif=req.motif, mnemonic=req.mnemonic)
        return store.create(draft).to_dict()
    except WordConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/{word_id}")
def api_get_word(word_id: int, store: WordStore = Depends(get_store)) -> dict[str, Any]:
    try:
        return store.get(word_id).to_dict()
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND) from e


@router.get("/{word_id}/notation.svg")
def api_get_word_notation(word_id: int, store: WordStore = Depends(get_store)) -> Response:
    try:
        record = store.get(word_id)
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND) from e
    return Response(content=render_motif_svg(record.motif or DEFAULT_DETAIL_MOTIF), media_type="image/svg+xml")


@router.put("/{word_id}")
def api_update_word(
    word_id: int,
    req: UpdateWordRequest,
    store: WordStore = Depends(get_store),
    _admin: dict[str, Any] = Depends(require_admin),
) -> dict[str, Any]:
    try:
        return store.update(word_id, req.model_dump(exclude_unset=True)).to_dict()
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND) from e
    except WordConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/{word_id}/accept")
def api_accept_word(
    word_id: int,
    store: WordStore = Depends(get_store),
    _admin: dict[str, Any] = Depends(require_admin),
) -> dict[str, Any]:
    try:
        return store.accept(word_id).to_dict()
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND) from e


@router.delete("/{word_id}")
def api_delete_word(
    word_id: int,
    store: WordStore = Depends(get_store),
    _admin: dict[str, Any] = Depends(require_admin),
) -> dict[str, str]:
    try:
        store.delete(word_id)
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=WORD_NOT_FOUND) from e
    return {"message": "Word deleted successfully"}
