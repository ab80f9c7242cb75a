"""
Addon Application - owner of the hook registry

Whoever registers or dispatches hooks is handed an AddonApp instead of
reaching for module-level state.
"""
import sys
from typing import Any, Callable, Optional

from loguru import logger

from .config import HookSettings, load_settings
from .hooks import HookEvents, HookRegistry


class AddonApp:
    """Application context: settings, logging and one HookRegistry"""

    def __init__(self, settings: Optional[HookSettings] = None):
        self.settings = settings or load_settings()
        if self.settings.configure_logging:
            self._setup_logging()
        self.hooks = HookRegistry(policy=self.settings.duplicate_policy)
        self._running = False

    def _setup_logging(self):
        logger.remove()
        logger.add(
            sys.stderr,
            level=self.settings.log_level,
            format="<level>{level: <8}</level> | <level>{message}</level>"
        )
        log_path = self.settings.log_path
        if log_path:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                str(log_path),
                level="DEBUG",
                rotation="10 MB",
                retention="7 days",
                encoding="utf-8"
            )

    @property
    def running(self) -> bool:
        return self._running

    def register(self, name: str, handler: Callable) -> None:
        self.hooks.register(name, handler)

    def on(self, name: str) -> Callable[[Callable], Callable]:
        return self.hooks.on(name)

    def dispatch(self, name: str, *args, **kwargs) -> Any:
        return self.hooks.dispatch(name, *args, **kwargs)

    def render(self, name: str, *args, once: bool = False, **kwargs) -> str:
        return self.hooks.render(name, *args, once=once, **kwargs)

    def start(self) -> None:
        """Dispatch app:init once; handlers receive the app"""
        if self._running:
            return
        self.hooks.dispatch(HookEvents.APP_INIT, self)
        self._running = True
        logger.info(f"AddonApp started, {len(self.hooks)} extension points registered")

    def shutdown(self) -> None:
        """Dispatch app:shutdown, then drop every handler"""
        if not self._running:
            return
        try:
            self.hooks.dispatch(HookEvents.APP_SHUTDOWN, self)
        finally:
            self._running = False
            self.hooks.clear()
            logger.info("AddonApp shutdown")
