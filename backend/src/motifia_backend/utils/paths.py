"""
路径与仓库定位工具。

定位：
- 后端运行时需要定位仓库根目录，以便把缺省的 SQLite 数据库放在 backend/data 下。
- 显式配置了 DATABASE_URL 时不会走到这里。
"""

from __future__ import annotations

from pathlib import Path


def find_repo_root(start: Path | None = None) -> Path:
    """向上搜索仓库根目录（基于目录特征）。"""

    cur = (start or Path(__file__)).resolve()
    if cur.is_file():
        cur = cur.parent

    for _ in range(20):
        if (cur / "backend" / "src").exists() and (cur / "pyproject.toml").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    raise RuntimeError("无法定位仓库根目录（未找到 backend/src 与 pyproject.toml）")


def backend_dir() -> Path:
    return find_repo_root() / "backend"


def data_dir() -> Path:
    return backend_dir() / "data"


def default_database_url() -> str:
    d = data_dir()
    d.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{d / 'motifia.sqlite3'}"
