"""
HTTP 层（FastAPI）：词条 CRUD、管理员登录、记谱渲染。
"""
