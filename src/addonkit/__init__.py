"""
addonkit - extension point registry for addon-based applications

- HookRegistry: named extension points, ordered handlers, synchronous dispatch
- AddonApp: application context owning settings and one registry
"""
from .app import AddonApp
from .config import HookSettings, load_settings
from .errors import AsyncHandlerError, HookError, InvalidRegistrationError
from .hooks import DuplicatePolicy, HookEvents, HookRegistry

__version__ = "0.1.0"

__all__ = [
    # registry
    "HookRegistry",
    "HookEvents",
    "DuplicatePolicy",
    # application
    "AddonApp",
    "HookSettings",
    "load_settings",
    # errors
    "HookError",
    "InvalidRegistrationError",
    "AsyncHandlerError",
]
