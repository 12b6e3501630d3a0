"""API 路由"""
from fastapi import APIRouter
from .v1 import bookmarks

api_router = APIRouter()

# 注册路由
api_router.include_router(bookmarks.router, prefix="/bookmarks", tags=["书签"])
