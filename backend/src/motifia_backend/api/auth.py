"""
管理员登录（/api/auth）：Google 授权码交换 → 服务端会话 → 单邮箱白名单。

约定：
- 会话中只保存 {email, name, picture}；cookie 名、有效期、SameSite 等由 config.Settings 决定。
- 交换失败 401，非白名单邮箱 403（此时不写会话）。
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ..config import Settings
from ..infra.identity import IdentityExchangeError, IdentityProvider, is_authorized
from .deps import get_app_settings, get_identity_provider


logger = logging.getLogger(__name__)

router = APIRouter()


class GoogleAuthRequest(BaseModel):
    code: str = ""


@router.get("/check")
def api_auth_check(request: Request) -> dict[str, Any]:
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


@router.post("/google")
def api_auth_google(
    req: GoogleAuthRequest,
    request: Request,
    settings: Settings = Depends(get_app_settings),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> dict[str, bool]:
    if not req.code:
        raise HTTPException(status_code=400, detail="Missing authorization code")

    try:
        identity = provider.exchange_code(req.code)
    except IdentityExchangeError as e:
        logger.warning("Auth error: %s", e)
        raise HTTPException(status_code=401, detail="Authentication failed") from e

    if not is_authorized(identity.email, settings.authorized_email):
        logger.info("Unauthorized email: %s", identity.email)
        raise HTTPException(status_code=403, detail="Unauthorized email")

    request.session["user"] = identity.to_dict()
    logger.info("User authenticated successfully: email=%s", identity.email)
    return {"success": True}


@router.post("/logout")
def api_auth_logout(request: Request) -> dict[str, bool]:
    user = request.session.get("user")
    request.session.clear()
    if user:
        logger.info("User logged out: email=%s", user.get("email"))
    return {"success": True}
