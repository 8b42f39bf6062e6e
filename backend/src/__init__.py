"""
后端代码根目录。

定位：
- 记谱语法与渲染（motifnotation）和词典服务（motifia_backend）都放在 backend/src 下。
- 前端只负责展示与交互，不直接承载“真值”校验逻辑。
"""
