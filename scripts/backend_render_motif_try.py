"""
motif 记谱渲染演示：解析 → 布局 → SVG，输出到 temp/。

目标：
- 打印每个示例 motif 的 token 与首音规则检查结果
- 把渲染结果写成 temp/motif_<n>.svg，便于直接用浏览器查看

运行：
  python scripts/backend_render_motif_try.py
  python scripts/backend_render_motif_try.py 'C#D*E"' verb
"""

from __future__ import annotations

from pathlib import Path
import sys


def _ensure_backend_src_on_path(repo_root: Path) -> None:
    src_dir = repo_root / "backend" / "src"
    if not src_dir.exists():
        raise RuntimeError(f"找不到 backend/src：{src_dir}")
    sys.path.insert(0, str(src_dir))


SAMPLES = [
    ("CEG", "noun"),
    ("DF#A", "verb"),
    ('A*C"E', "adjective"),
    ("xyzC123D", "noun"),
    ("", None),
]


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    _ensure_backend_src_on_path(repo_root)

    from motifnotation import alphabet_violation, first_note_violation, parse_motif, render_motif_svg

    samples = SAMPLES
    if len(sys.argv) > 1:
        samples = [(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None)]

    out_dir = repo_root / "temp"
    out_dir.mkdir(parents=True, exist_ok=True)

    for i, (motif, part) in enumerate(samples):
        tokens = parse_motif(motif)
        print(f"[motif] {motif!r} part={part}")
        print("  tokens:", " ".join(t.to_text() for t in tokens) or "(none)")
        print("  alphabet:", alphabet_violation(motif) or "ok")
        print("  first note:", first_note_violation(motif, part) or "ok")

        path = out_dir / f"motif_{i}.svg"
        path.write_text(render_motif_svg(motif), encoding="utf-8")
        print("  svg:", path)


if __name__ == "__main__":
    main()
