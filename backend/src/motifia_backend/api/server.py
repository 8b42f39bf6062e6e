"""
Motifia 后端 API（FastAPI）。

约定：
- 服务端口：5000（前端开发服务器 5173，作为唯一 CORS 来源，允许携带 cookie）
- 数据：单表 words（SQLAlchemy；缺省 SQLite，见 utils.paths）

API 设计原则：
- 路由只做 HTTP 映射；校验在 domain 层（存储边界），记谱逻辑在 motifnotation 包。
- 错误显式返回（400/401/403/404/409），不把异常吞成“空列表”之类的静默降级。

启动：uvicorn 以 factory 方式调用 `create_app`（见 backend/run_server.py），导入本模块没有副作用。
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from ..config import Settings, get_settings
from ..infra.identity import GoogleIdentityProvider, IdentityProvider
from ..infra.word_store import WordStore
from ..utils.paths import default_database_url
from . import auth, notation, words


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Motifia API starting (cors_origin=%s)", app.state.settings.cors_origin)
    yield
    app.state.store.dispose()
    logger.info("Motifia API stopped")


def create_app(
    settings: Settings | None = None,
    *,
    store: WordStore | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = WordStore.from_url(settings.database_url or default_database_url())
    if identity_provider is None:
        identity_provider = GoogleIdentityProvider(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_callback_url,
        )

    app = FastAPI(title="Motifia Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.identity_provider = identity_provider

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
        response = await call_next(request)
        has_user = "session" in request.scope and bool(request.session.get("user"))
        logger.debug(
            "%s %s -> %s (has_user=%s origin=%s)",
            request.method,
            request.url.path,
            response.status_code,
            has_user,
            request.headers.get("origin"),
        )
        return response

    # add_middleware 后加的在外层：CORS → Session → 日志 → 路由
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age_seconds,
        same_site=settings.cookie_same_site,
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization", "Cookie"],
    )

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Welcome to the Motifia API"}

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(words.router, prefix="/api/words", tags=["words"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(notation.router, prefix="/api/notation", tags=["notation"])

    return app
