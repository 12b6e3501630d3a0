"""接口错误"""
from typing import Any


class APIError(Exception):
    """返回给客户端的错误，响应体为 {"errors": {scope: message}}"""

    def __init__(self, status_code: int, scope: str, message: Any):
        super().__init__(message)
        self.status_code = status_code
        self.scope = scope
        self.message = message

    def to_dict(self) -> dict:
        return {"errors": {self.scope: self.message}}
