"""
Motifia 后端开发服务器启动脚本。

定位：
- 未执行 `pip install -e .` 时也能直接启动：启动时把 `backend/src` 加到 `sys.path`。
- 约定后端端口为 5000（与前端 5173 配套），缺省值取自 Settings（API_HOST / API_PORT）。

用法：
  python backend/run_server.py

可选参数（透传给 uvicorn）：
  python backend/run_server.py --reload
  python backend/run_server.py --host 0.0.0.0 --port 5000
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn


def main() -> None:
    backend_dir = Path(__file__).resolve().parent
    src_dir = backend_dir / "src"
    if not src_dir.exists():
        raise RuntimeError(f"找不到后端源码目录：{src_dir}")

    sys.path.insert(0, str(src_dir))

    from motifia_backend.config import get_settings

    settings = get_settings()

    parser = argparse.ArgumentParser(add_help=True)
    parser.add_argument("--host", default=settings.api_host)
    parser.add_argument("--port", type=int, default=settings.api_port)
    parser.add_argument("--reload", action="store_true", default=False)
    parser.add_argument("--log-level", default=settings.log_level.lower())
    args, unknown = parser.parse_known_args(sys.argv[1:])
    if unknown:
        raise SystemExit(f"不支持的参数：{unknown!r}")

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # --reload 默认会 watch 当前工作目录；限定到后端源码，避免前端 node_modules 触发重载。
    reload_dirs = [str(src_dir)] if args.reload else None

    # 生产环境在反向代理之后：信任转发头，否则 https_only 的会话 cookie 不会下发。
    proxy_kwargs = {"proxy_headers": True, "forwarded_allow_ips": "*"} if settings.is_production else {}

    uvicorn.run(
        "motifia_backend.api.server:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=reload_dirs,
        log_level=args.log_level,
        **proxy_kwargs,
    )


if __name__ == "__main__":
    main()
