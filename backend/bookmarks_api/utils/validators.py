"""
书签字段校验

link 校验规则按顺序执行，遇到第一个失败即返回：
- presence：不能为空
- url：形如 scheme://host[:port][/path]，scheme 不做限制
- exclusion：不能完全匹配黑名单中的链接

description / favorites 只做类型校验。
"""

import ipaddress
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..config import settings


# ==================== 错误码 ====================

INVALID_LINK = "BOOKMARKS_INVALID_LINK"
BLOCKED_DOMAIN = "BOOKMARKS_BLOCKED_DOMAIN"
INVALID_DESCRIPTION = "BOOKMARKS_INVALID_DESCRIPTION"
INVALID_FAVORITES = "BOOKMARKS_INVALID_FAVORITES"
INVALID_REQUEST = "BOOKMARKS_INVALID_REQUEST"


# ==================== URL 格式 ====================

_LABEL = r"[a-z0-9\u00a1-\uffff](?:[a-z0-9\u00a1-\uffff_-]{0,61}[a-z0-9\u00a1-\uffff])?"

# 首段 1-223，末段 1-254（排除 0.x.x.x、组播、广播和网络地址）
_IPV4 = (
    r"(?:[1-9]\d?|1\d\d|2[01]\d|22[0-3])"
    r"(?:\.(?:1?\d{1,2}|2[0-4]\d|25[0-5])){2}"
    r"\.(?:[1-9]\d?|1\d\d|2[0-4]\d|25[0-4])"
)

# scheme 不允许包含空白和 : / ? #
URL_PATTERN = re.compile(
    r"^"
    r"[^\s:/?#]+://"                                  # scheme（任意非空）
    r"(?:[^\s:@/]+(?::[^\s@/]*)?@)?"                   # user:pass@
    r"(?:"
    rf"(?P<ipv4>{_IPV4})"                              # IPv4
    r"|"
    rf"(?:{_LABEL}\.)+[a-z\u00a1-\uffff]{{2,}}\.?"      # 域名 + TLD
    r")"
    r"(?::\d{2,5})?"                                  # 端口
    r"(?:[/?#]\S*)?"                                  # 路径 / 查询 / 锚点
    r"$",
    re.IGNORECASE,
)

# 不允许收藏的内网 IP 段
BLOCKED_IP_RANGES = [
    ipaddress.ip_network("127.0.0.0/8"),      # localhost
    ipaddress.ip_network("10.0.0.0/8"),       # 私有网络
    ipaddress.ip_network("172.16.0.0/12"),    # 私有网络
    ipaddress.ip_network("192.168.0.0/16"),   # 私有网络
    ipaddress.ip_network("169.254.0.0/16"),   # 链路本地
]


def is_ip_blocked(ip: str) -> bool:
    """检查 IP 是否在禁止范围内"""
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return any(address in network for network in BLOCKED_IP_RANGES)


class LinkValidationError(ValueError):
    """字段校验失败"""

    def __init__(self, code: str, description: str):
        super().__init__(description)
        self.code = code
        self.description = description

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "description": self.description}


def check_link(value: Any) -> str:
    """
    校验书签链接

    Args:
        value: 提交的链接

    Returns:
        原样返回通过校验的链接

    Raises:
        LinkValidationError: 第一个未通过的规则
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise LinkValidationError(INVALID_LINK, "Link can't be blank")

    match = URL_PATTERN.match(value) if isinstance(value, str) else None
    if match is None or (match.group("ipv4") and is_ip_blocked(match.group("ipv4"))):
        raise LinkValidationError(INVALID_LINK, "Link invalid")

    if value in settings.BLOCKED_LINKS:
        raise LinkValidationError(BLOCKED_DOMAIN, "Link is banned")

    return value


def check_description(value: Any) -> Optional[str]:
    """description 必须是字符串"""
    if value is not None and not isinstance(value, str):
        raise LinkValidationError(INVALID_DESCRIPTION, "Description is invalid")
    return value


def check_favorites(value: Any, nullable: bool = True) -> Optional[bool]:
    """favorites 必须是布尔值（nullable=False 时不接受 null）"""
    if value is None and nullable:
        return value
    if not isinstance(value, bool):
        raise LinkValidationError(INVALID_FAVORITES, "Favorites is invalid")
    return value


def validation_error(exc: ValidationError) -> Dict[str, str]:
    """取 pydantic 校验结果中的第一个错误"""
    errors = exc.errors()
    if not errors:
        return {"code": INVALID_REQUEST, "description": "Request invalid"}
    first = errors[0]
    code = first["type"] if first["type"].startswith("BOOKMARKS_") else INVALID_REQUEST
    return {"code": code, "description": first["msg"]}
