"""
FastAPI 依赖：从 app.state 取存储/配置/身份提供方，以及管理员会话校验。
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, Request

from ..config import Settings
from ..infra.identity import IdentityProvider, is_authorized
from ..infra.word_store import WordStore


logger = logging.getLogger(__name__)


def get_store(request: Request) -> WordStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def require_admin(request: Request) -> dict[str, Any]:
    """当前会话必须是白名单邮箱的管理员：未登录 401，非白名单 403。"""

    user = request.session.get("user")
    if not isinstance(user, dict) or not user.get("email"):
        raise HTTPException(status_code=401, detail="Not authenticated")
    settings = get_app_settings(request)
    if not is_authorized(user.get("email"), settings.authorized_email):
        logger.warning("Admin access denied: email=%s path=%s", user.get("email"), request.url.path)
        raise HTTPException(status_code=403, detail="Unauthorized email")
    return user
