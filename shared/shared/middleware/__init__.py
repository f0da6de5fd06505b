from shared.middleware.request_id import request_id_middleware
from shared.middleware.error_handler import register_error_handlers

__all__ = ["request_id_middleware", "register_error_handlers"]
