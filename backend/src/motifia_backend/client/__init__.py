"""
API 的调用方：异步 HTTP 客户端、防抖检查任务、提交表单状态。

定位：
- 供前端或脚本调用；“添加词条”表单状态是显式的局部对象，不使用进程级单例。
"""

from .api_client import MotifiaApiError, MotifiaClient
from .debounce import DEFAULT_DEBOUNCE_SECONDS, DebouncedCheck
from .submission_form import SubmissionForm, SubmissionWatcher

__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "DebouncedCheck",
    "MotifiaApiError",
    "MotifiaClient",
    "SubmissionForm",
    "SubmissionWatcher",
]
