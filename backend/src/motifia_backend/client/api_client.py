"""
Motifia API 的异步客户端（httpx）。

约定：
- 所有请求携带 cookie（会话 cookie 由 httpx.AsyncClient 自动保存）。
- 非 2xx 响应抛 MotifiaApiError；按键/按 motif 查询的 404 返回 None（“不存在”是正常结果）。
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx


logger = logging.getLogger(__name__)


DEFAULT_API_URL = "http://localhost:5000"


class MotifiaApiError(Exception):
    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def normalize_base_url(url: str | None) -> str:
    """未写协议时补 https://（部署时常只配置域名）。"""

    u = (url or "").strip()
    if not u:
        return DEFAULT_API_URL
    if not u.startswith("http"):
        u = f"https://{u}"
    return u.rstrip("/")


def _detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


class MotifiaClient:
    def __init__(self, base_url: str | None = None, *, transport: httpx.AsyncBaseTransport | None = None, timeout: float = 10.0) -> None:
        self.base_url = normalize_base_url(base_url)
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "MotifiaClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, *, json: Any = None, params: dict[str, Any] | None = None) -> httpx.Response:
        logger.debug("%s %s", method, path)
        resp = await self._http.request(method, path, json=json, params=params)
        if resp.is_success:
            return resp
        raise MotifiaApiError(resp.status_code, _detail(resp))

    async def _get_optional(self, path: str) -> dict[str, Any] | None:
        try:
            resp = await self._request("GET", path)
        except MotifiaApiError as e:
            if e.status_code == 404:
                return None
            raise
        return resp.json()

    # words

    async def list_words(
        self, *, status: str | None = None, q: str | None = None, part_of_speech: str | None = None
    ) -> list[dict[str, Any]]:
        params = {k: v for k, v in (("status", status), ("q", q), ("part_of_speech", part_of_speech)) if v} or None
        return (await self._request("GET", "/api/words", params=params)).json()

    async def get_word(self, word_id: int) -> dict[str, Any] | None:
        return await self._get_optional(f"/api/words/{int(word_id)}")

    async def get_by_word(self, word: str) -> dict[str, Any] | None:
        return await self._get_optional(f"/api/words/word/{quote(word, safe='')}")

    async def get_by_motif(self, motif: str) -> dict[str, Any] | None:
        return await self._get_optional(f"/api/words/motif/{quote(motif, safe='')}")

    async def create_word(self, *, word: str, part_of_speech: str | None, motif: str | None, mnemonic: str | None = None) -> dict[str, Any]:
        payload = {"word": word, "part_of_speech": part_of_speech, "motif": motif, "mnemonic": mnemonic}
        return (await self._request("POST", "/api/words", json=payload)).json()

    async def update_word(self, word_id: int, **changes: Any) -> dict[str, Any]:
        return (await self._request("PUT", f"/api/words/{int(word_id)}", json=changes)).json()

    async def accept_word(self, word_id: int) -> dict[str, Any]:
        return (await self._request("POST", f"/api/words/{int(word_id)}/accept")).json()

    async def delete_word(self, word_id: int) -> None:
        await self._request("DELETE", f"/api/words/{int(word_id)}")

    async def notation_svg(self, motif: str) -> str:
        return (await self._request("GET", "/api/notation/svg", params={"motif": motif})).text

    # auth

    async def check_auth(self) -> dict[str, Any] | None:
        try:
            return (await self._request("GET", "/api/auth/check")).json()
        except MotifiaApiError as e:
            if e.status_code == 401:
                return None
            raise

    async def login_google(self, code: str) -> None:
        await self._request("POST", "/api/auth/google", json={"code": code})

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")
