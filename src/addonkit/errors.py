"""
Errors - addonkit error types
"""


class HookError(Exception):
    """Base class for addonkit errors"""


class InvalidRegistrationError(HookError, ValueError):
    """Registration called with an empty name or a non-callable handler"""


class AsyncHandlerError(HookError, TypeError):
    """Coroutine handler reached by a synchronous dispatch"""

    def __init__(self, name: str, handler):
        self.name = name
        self.handler = handler
        handler_name = getattr(handler, "__qualname__", repr(handler))
        super().__init__(
            f"Hook '{name}' has coroutine handler {handler_name}; use adispatch/acollect"
        )
