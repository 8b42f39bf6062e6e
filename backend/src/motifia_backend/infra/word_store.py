"""
词条存储（SQLAlchemy，单表 `words`）。

表结构：

  words(
    id INTEGER PRIMARY KEY,
    word VARCHAR(255) UNIQUE NOT NULL,   -- 小写化后的唯一键
    part_of_speech VARCHAR(32) NULL,
    motif VARCHAR(255) NULL,
    mnemonic TEXT NULL,
    status VARCHAR(16) NOT NULL,         -- queued | accepted
    created_at / updated_at TIMESTAMP
  )

说明：
- 进入存储的字段一律先经过 `domain.words` 规范化（存储边界校验），这里不再接受裸 dict。
- 唯一性冲突先查后插；并发下仍可能撞到 UNIQUE 约束，此时把 IntegrityError 转成 WordConflictError。
- 每次调用使用独立的 Session，可在 FastAPI 的线程池中并发调用。
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from sqlalchemy import DateTime, Integer, String, Text, create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from ..domain.words import WordDraft, WordRecord, normalize_changes, normalize_part_of_speech, normalize_status


logger = logging.getLogger(__name__)


class WordNotFoundError(LookupError):
    pass


class WordConflictError(Exception):
    pass


DUPLICATE_WORD_MESSAGE = "This word already exists"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class WordRow(Base):
    __tablename__ = "words"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    part_of_speech: Mapped[str | None] = mapped_column(String(32), nullable=True)
    motif: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mnemonic: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="queued")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utc_now)


def _iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        # SQLite 不保存时区信息，读回来的都是 naive UTC
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def _row_to_record(row: WordRow) -> WordRecord:
    return WordRecord(
        id=row.id,
        word=row.word,
        part_of_speech=row.part_of_speech,
        motif=row.motif,
        mnemonic=row.mnemonic,
        status=row.status,
        created_at=_iso(row.created_at),
        updated_at=_iso(row.updated_at),
    )


def create_store_engine(database_url: str) -> Engine:
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


class WordStore:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> "WordStore":
        store = cls(create_store_engine(database_url))
        store.create_schema()
        return store

    def create_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._sessions() as session:
            with session.begin():
                yield session

    def _find_by_key(self, session: Session, key: str) -> WordRow | None:
        return session.scalars(select(WordRow).where(func.lower(WordRow.word) == key)).first()

    def list_words(
        self,
        *,
        status: str | None = None,
        q: str | None = None,
        part_of_speech: str | None = None,
    ) -> list[WordRecord]:
        """词典列表；q 为大小写不敏感的子串匹配，词性为精确匹配。"""

        stmt = select(WordRow).order_by(WordRow.word.asc())
        if status is not None:
            stmt = stmt.where(WordRow.status == normalize_status(status))
        needle = (q or "").strip().lower()
        if needle:
            stmt = stmt.where(func.lower(WordRow.word).contains(needle, autoescape=True))
        pos = normalize_part_of_speech(part_of_speech)
        if pos is not None:
            stmt = stmt.where(WordRow.part_of_speech == pos)
        with self._session() as session:
            return [_row_to_record(r) for r in session.scalars(stmt)]

    def get(self, word_id: int) -> WordRecord:
        with self._session() as session:
            row = session.get(WordRow, word_id)
            if row is None:
                raise WordNotFoundError(word_id)
            return _row_to_record(row)

    def get_by_key(self, word: str) -> WordRecord | None:
        key = (word or "").strip().lower()
        if not key:
            return None
        with self._session() as session:
            row = self._find_by_key(session, key)
            return _row_to_record(row) if row is not None else None

    def get_by_motif(self, motif: str) -> WordRecord | None:
        m = (motif or "").strip().lower()
        if not m:
            return None
        stmt = select(WordRow).where(func.lower(WordRow.motif) == m).order_by(WordRow.id.asc())
        with self._session() as session:
            row = session.scalars(stmt).first()
            return _row_to_record(row) if row is not None else None

    def create(self, draft: WordDraft) -> WordRecord:
        try:
            with self._session() as session:
                if self._find_by_key(session, draft.word) is not None:
                    raise WordConflictError(DUPLICATE_WORD_MESSAGE)
                row = WordRow(
                    word=draft.word,
                    part_of_speech=draft.part_of_speech,
                    motif=draft.motif,
                    mnemonic=draft.mnemonic,
                    status="queued",
                )
                session.add(row)
                session.flush()
                record = _row_to_record(row)
        except IntegrityError as e:
            raise WordConflictError(DUPLICATE_WORD_MESSAGE) from e

        logger.info("Word created: id=%s word=%r", record.id, record.word)
        return record

    def update(self, word_id: int, changes: dict[str, Any]) -> WordRecord:
        fields = normalize_changes(changes)
        try:
            with self._session() as session:
                row = session.get(WordRow, word_id)
                if row is None:
                    raise WordNotFoundError(word_id)
                new_key = fields.get("word")
                if new_key is not None and new_key != row.word:
                    other = self._find_by_key(session, new_key)
                    if other is not None and other.id != row.id:
                        raise WordConflictError(DUPLICATE_WORD_MESSAGE)
                for key, value in fields.items():
                    setattr(row, key, value)
                row.updated_at = _utc_now()
                session.flush()
                record = _row_to_record(row)
        except IntegrityError as e:
            raise WordConflictError(DUPLICATE_WORD_MESSAGE) from e

        logger.info("Word updated: id=%s fields=%s", word_id, sorted(fields))
        return record

    def accept(self, word_id: int) -> WordRecord:
        return self.update(word_id, {"status": "accepted"})

    def delete(self, word_id: int) -> None:
        with self._session() as session:
            row = session.get(WordRow, word_id)
            if row is None:
                raise WordNotFoundError(word_id)
            session.delete(row)
        logger.info("Word deleted: id=%s", word_id)
