# farm/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
color_ctx = contextvars.ContextVar("color", default=None)
