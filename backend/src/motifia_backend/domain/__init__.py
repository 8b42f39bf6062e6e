"""词条领域模型与校验（不依赖存储与 HTTP）。"""
