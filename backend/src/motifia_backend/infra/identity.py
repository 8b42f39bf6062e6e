"""
身份网关：OAuth 授权码 → 用户身份（email/name/picture），以及单邮箱白名单授权。

定位：
- 令牌交换的细节交给身份提供方 SDK（google-auth 负责 ID token 验签）；本模块只做薄封装。
- API 层只依赖 `IdentityProvider` 协议，测试时可注入假实现。

约束：
- 缺少 email/name/picture 任一字段即视为失败（IdentityExchangeError），不做部分登录。
- 授权 = email 与配置的 AUTHORIZED_EMAIL 完全相等；未配置白名单时一律拒绝。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token


logger = logging.getLogger(__name__)


GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


class IdentityExchangeError(Exception):
    pass


@dataclass(frozen=True)
class Identity:
    email: str
    name: str
    picture: str

    def to_dict(self) -> dict[str, str]:
        return {"email": self.email, "name": self.name, "picture": self.picture}

    @classmethod
    def from_claims(cls, claims: dict[str, Any] | None) -> "Identity":
        claims = claims or {}
        email = claims.get("email")
        name = claims.get("name")
        picture = claims.get("picture")
        if not email or not name or not picture:
            raise IdentityExchangeError("Missing required user information")
        return cls(email=str(email), name=str(name), picture=str(picture))


class IdentityProvider(Protocol):
    def exchange_code(self, code: str) -> Identity: ...


class GoogleIdentityProvider:
    """Google OAuth：授权码换 token，再用 google-auth 校验 ID token。"""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        http_client: httpx.Client | None = None,
        token_url: str = GOOGLE_TOKEN_URL,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.token_url = token_url
        self._http = http_client

    def _post_token(self, data: dict[str, str]) -> httpx.Response:
        if self._http is not None:
            return self._http.post(self.token_url, data=data)
        with httpx.Client(timeout=10.0) as client:
            return client.post(self.token_url, data=data)

    def _verify_id_token(self, token: str) -> dict[str, Any]:
        return google_id_token.verify_oauth2_token(token, google_requests.Request(), audience=self.client_id)

    def exchange_code(self, code: str) -> Identity:
        if not code:
            raise IdentityExchangeError("Missing authorization code")

        try:
            resp = self._post_token(
                {
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                }
            )
        except httpx.HTTPError as e:
            raise IdentityExchangeError(f"Token exchange request failed: {e}") from e

        if resp.status_code != 200:
            raise IdentityExchangeError(f"Token exchange failed: status={resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise IdentityExchangeError("Token response is not JSON") from e

        token = body.get("id_token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token:
            raise IdentityExchangeError("Token response has no id_token")

        try:
            claims = self._verify_id_token(token)
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            raise IdentityExchangeError(f"Invalid id_token: {e}") from e

        identity = Identity.from_claims(claims)
        logger.info("Google identity verified: email=%s", identity.email)
        return identity


def is_authorized(email: str | None, allowed_email: str | None) -> bool:
    if not allowed_email or not email:
        return False
    return email == allowed_email
