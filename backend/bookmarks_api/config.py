"""应用配置"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Dict, Optional
from pathlib import Path
import os

# 确定项目根目录（支持本地开发和 Docker 部署）
# 本地开发: backend/bookmarks_api/config.py -> 项目根目录是 ../../
# Docker: /app/bookmarks_api/config.py -> 数据目录是 /app/data
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent  # backend 目录
_project_root = _backend_dir.parent  # 项目根目录

# 检测运行环境
if os.path.exists("/app/data"):
    # Docker 环境
    _data_dir = Path("/app/data")
    _env_file = Path("/app/.env") if Path("/app/.env").exists() else None
else:
    # 本地开发环境
    _data_dir = _project_root / "data"
    _env_file = _project_root / ".env" if (_project_root / ".env").exists() else None


class Settings(BaseSettings):
    """应用设置"""
    # 应用
    APP_NAME: str = "Bookmarks API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 数据库（默认使用项目根目录的 data 文件夹）
    DATABASE_URL: str = f"sqlite+aiosqlite:///{_data_dir}/bookmarks.db"

    # 日志（LOG_FILE 为空时输出到 stderr）
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:80",
        "http://localhost:5173",
        "https://localhost",
        "https://localhost:443",
        "https://localhost:5173",
    ]

    # 列表查询默认参数
    DEFAULT_LIMIT: int = 50
    DEFAULT_OFFSET: int = 0
    DEFAULT_SORT_BY: str = "createdAt"
    DEFAULT_SORT_DIR: str = "asc"

    # 禁止收藏的链接（完全匹配）
    BLOCKED_LINKS: Dict[str, str] = {
        "http://yahoo.com": "Yahoo",
        "https://yahoo.com": "Yahoo",
        "http://socket.io": "Socket.io",
        "https://socket.io": "Socket.io",
    }

    class Config:
        env_file = str(_env_file) if _env_file else ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


settings = get_settings()
