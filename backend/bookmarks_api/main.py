"""FastAPI 应用入口"""
import logging
import logging.config

from .config import settings

# 日志配置（LOG_FILE 未设置时输出到 stderr）
_handler = {
    "formatter": "standard",
    "class": "logging.StreamHandler",
}
if settings.LOG_FILE:
    _handler = {
        "formatter": "standard",
        "class": "logging.FileHandler",
        "filename": settings.LOG_FILE,
        "mode": "a",
        "encoding": "utf-8",
    }

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s:%(name)s:%(message)s"}
    },
    "handlers": {
        "default": _handler,
    },
    "root": {
        "level": settings.LOG_LEVEL,
        "handlers": ["default"]
    },
    "loggers": {
        "bookmarks_api": {"level": settings.LOG_LEVEL},
        "sqlalchemy.engine": {"level": "INFO" if settings.DEBUG else "WARNING"},
    }
})

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .database import init_db, close_db
from .exceptions import APIError
from .api import api_router
from .utils.validators import INVALID_REQUEST

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时
    await init_db()
    logger.info(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} 启动成功")
    yield
    # 关闭时
    await close_db()
    logger.info("👋 应用关闭完成")


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="书签管理 API",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    """统一错误响应 {"errors": {scope: message}}"""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """请求体无法解析（非 JSON 对象等）"""
    errors = exc.errors()
    description = errors[0]["msg"] if errors else "Request invalid"
    logger.info(f"[Request] 请求无效: {request.method} {request.url.path} {description}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "errors": {
                "validation": {"code": INVALID_REQUEST, "description": description}
            }
        },
    )


# 注册路由
app.include_router(api_router, prefix="/api/v1")


# 健康检查
@app.get("/health", tags=["系统"], summary="健康检查")
async def health_check():
    """检查服务运行状态"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


# 根路由
@app.get("/", tags=["系统"], summary="欢迎页")
async def root():
    """返回 API 基本信息"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/api/docs"
    }
