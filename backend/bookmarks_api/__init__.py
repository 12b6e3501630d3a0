"""书签管理 REST API"""
__version__ = "1.0.0"
