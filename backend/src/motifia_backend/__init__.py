"""
Motifia 词典后端。

分层：
- domain：词条类型、存储边界校验、提交前诊断（纯函数，不做 IO）
- infra：词条存储（SQLAlchemy）与 Google 身份交换
- api：FastAPI 路由与应用工厂
- client：异步 API 客户端与“添加词条”表单的防抖检查
"""
