"""
Hook System - extension point registry

Addons contribute handlers to named extension points; the host dispatches
them in registration order with a shared argument list.
"""
import inspect
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from .errors import AsyncHandlerError, InvalidRegistrationError


class DuplicatePolicy(Enum):
    """What register() does with a name that was already seen"""

    APPEND = "append"           # every handler is appended
    FIRST_WINS = "first_wins"   # only the first handler ever registered is kept

    @classmethod
    def parse(cls, value: str) -> "DuplicatePolicy":
        normalized = (value or "").strip().lower().replace("-", "_")
        for policy in cls:
            if policy.value == normalized:
                return policy
        allowed = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown hook policy {value!r}, expected one of: {allowed}")


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidRegistrationError(f"Hook name must be a non-empty string, got {name!r}")
    return name


def _to_text(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


class HookRegistry:
    """
    Extension point registry

    dispatch() returns the value of the last handler that ran; collect()
    returns every value. A failing handler stops the chain and its exception
    reaches the caller.
    """

    def __init__(self, policy: DuplicatePolicy = DuplicatePolicy.APPEND):
        self.policy = policy
        self._hooks: Dict[str, List[Callable]] = {}
        self._seen: set = set()
        self._lock = threading.Lock()

    def register(self, name: str, handler: Callable) -> None:
        """
        Register a handler

        Args:
            name: extension point name
            handler: callable invoked on dispatch

        Raises:
            InvalidRegistrationError: empty name or non-callable handler
        """
        _check_name(name)
        if not callable(handler):
            raise InvalidRegistrationError(f"Handler for hook '{name}' is not callable: {handler!r}")

        with self._lock:
            if self.policy is DuplicatePolicy.FIRST_WINS and name in self._seen:
                logger.debug(f"Hook already claimed, ignoring handler: {name}")
                return
            self._seen.add(name)
            self._hooks.setdefault(name, []).append(handler)
        logger.debug(f"Hook registered: {name}")

    def on(self, name: str) -> Callable[[Callable], Callable]:
        """Decorator form of register()"""
        _check_name(name)

        def decorator(func: Callable) -> Callable:
            self.register(name, func)
            return func

        return decorator

    def unregister(self, name: str, handler: Callable) -> bool:
        """Remove one handler; returns whether it was registered"""
        with self._lock:
            handlers = self._hooks.get(name)
            if not handlers or handler not in handlers:
                return False
            handlers.remove(handler)
            if not handlers:
                del self._hooks[name]
        return True

    def clear(self, name: Optional[str] = None) -> None:
        """Drop one extension point, or everything when name is None"""
        with self._lock:
            if name is None:
                self._hooks.clear()
                self._seen.clear()
            else:
                self._hooks.pop(name, None)
                self._seen.discard(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return bool(self._hooks.get(name))

    def handlers(self, name: str) -> List[Callable]:
        """Handlers for name, in dispatch order (copy)"""
        with self._lock:
            return list(self._hooks.get(name, ()))

    def names(self) -> List[str]:
        with self._lock:
            return [name for name, handlers in self._hooks.items() if handlers]

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self.names())

    def dispatch(self, name: str, *args, **kwargs) -> Any:
        """
        Run every handler for name

        Args:
            name: extension point name
            args: positional arguments passed to every handler
            kwargs: keyword arguments passed to every handler

        Returns:
            Any: return value of the last handler, None if nothing is registered
        """
        result = None
        for handler in self.handlers(name):
            result = self._call(name, handler, args, kwargs)
        return result

    def collect(self, name: str, *args, once: bool = False, **kwargs) -> List[Any]:
        """
        Run every handler for name and keep all results

        Args:
            name: extension point name
            once: stop at the first handler returning something other than None

        Returns:
            List[Any]: results in registration order
        """
        results = []
        for handler in self.handlers(name):
            result = self._call(name, handler, args, kwargs)
            if once:
                if result is not None:
                    return [result]
                continue
            results.append(result)
        return results

    def render(self, name: str, *args, once: bool = False, **kwargs) -> str:
        """
        Collect results and join them into one string

        None and False contribute nothing and True becomes "1", the way the
        legacy template helper joined results.
        """
        results = self.collect(name, *args, once=once, **kwargs)
        return "".join(_to_text(r) for r in results)

    async def adispatch(self, name: str, *args, **kwargs) -> Any:
        """Async dispatch(); coroutine handlers are awaited"""
        result = None
        for handler in self.handlers(name):
            result = await self._acall(name, handler, args, kwargs)
        return result

    async def acollect(self, name: str, *args, once: bool = False, **kwargs) -> List[Any]:
        """Async collect(); coroutine handlers are awaited"""
        results = []
        for handler in self.handlers(name):
            result = await self._acall(name, handler, args, kwargs)
            if once:
                if result is not None:
                    return [result]
                continue
            results.append(result)
        return results

    def _call(self, name: str, handler: Callable, args: tuple, kwargs: dict) -> Any:
        if inspect.iscoroutinefunction(handler):
            raise AsyncHandlerError(name, handler)
        try:
            return handler(*args, **kwargs)
        except Exception as e:
            logger.error(f"Hook handler error for {name}: {e}")
            raise

    async def _acall(self, name: str, handler: Callable, args: tuple, kwargs: dict) -> Any:
        try:
            result = handler(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            logger.error(f"Hook handler error for {name}: {e}")
            raise


class HookEvents:
    """Extension points raised by the host"""

    APP_INIT = "app:init"
    APP_SHUTDOWN = "app:shutdown"

    @staticmethod
    def scoped(addon: str, event: str) -> str:
        """Addon-namespaced extension point name, e.g. 'blog:render_sidebar'"""
        for part in (addon, event):
            if not isinstance(part, str) or not part.strip():
                raise InvalidRegistrationError(f"Scoped hook parts must be non-empty, got {part!r}")
        return f"{addon.strip()}:{event.strip()}"
