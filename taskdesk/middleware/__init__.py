"""ASGI middleware."""

from taskdesk.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
