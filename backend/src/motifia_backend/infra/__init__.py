"""外部资源适配：数据库存储、OAuth 身份提供方。"""
