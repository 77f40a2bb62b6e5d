"""HTTP middleware: request ID.

Applied in main app. Import and use from sopflow.main.
"""

from sopflow.middleware.request_id import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
]
