"""Utilities Package"""
from app.utils.error_handler import NotFoundError, ServiceResult, handle_service_exception
from app.utils.error_decorators import service_operation, unwrap_result

__all__ = [
    "NotFoundError",
    "ServiceResult",
    "handle_service_exception",
    "service_operation",
    "unwrap_result",
]
