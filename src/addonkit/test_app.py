"""
AddonApp tests
"""
import pytest
from loguru import logger

from addonkit.app import AddonApp
from addonkit.config import HookSettings
from addonkit.hooks import DuplicatePolicy, HookEvents


def test_app_owns_registry_with_policy():
    app = AddonApp(HookSettings(duplicate_policy=DuplicatePolicy.FIRST_WINS))
    app.register("greet", lambda name: "Hi " + name)
    app.register("greet", lambda name: "Hello " + name)

    assert app.dispatch("greet", "Ann") == "Hi Ann"
    assert app.hooks.policy is DuplicatePolicy.FIRST_WINS


def test_apps_do_not_share_handlers():
    first, second = AddonApp(HookSettings()), AddonApp(HookSettings())
    first.register("point", lambda: 1)
    assert second.dispatch("point") is None


def test_start_and_shutdown_events():
    app = AddonApp(HookSettings())
    events = []

    @app.on(HookEvents.APP_INIT)
    def on_init(owner):
        events.append(("init", owner))

    @app.on(HookEvents.APP_SHUTDOWN)
    def on_shutdown(owner):
        events.append(("shutdown", owner))

    app.start()
    app.start()
    assert app.running
    assert events == [("init", app)]

    app.shutdown()
    app.shutdown()
    assert not app.running
    assert events == [("init", app), ("shutdown", app)]
    assert len(app.hooks) == 0


def test_shutdown_clears_even_when_handler_fails():
    app = AddonApp(HookSettings())

    def broken(owner):
        raise RuntimeError("cannot close")

    app.register(HookEvents.APP_SHUTDOWN, broken)
    app.start()
    with pytest.raises(RuntimeError):
        app.shutdown()
    assert not app.running
    assert len(app.hooks) == 0


def test_start_can_retry_after_init_failure():
    app = AddonApp(HookSettings())
    calls = []

    @app.on(HookEvents.APP_INIT)
    def flaky(owner):
        calls.append(owner)
        if len(calls) == 1:
            raise RuntimeError("not ready")

    with pytest.raises(RuntimeError):
        app.start()
    assert not app.running

    app.start()
    assert app.running
    assert calls == [app, app]


def test_render_joins_addon_output():
    app = AddonApp(HookSettings())
    app.register(HookEvents.scoped("blog", "sidebar"), lambda user: f"<li>{user}</li>")
    app.register(HookEvents.scoped("blog", "sidebar"), lambda user: None)
    app.register(HookEvents.scoped("blog", "sidebar"), lambda user: "<li>archive</li>")

    assert app.render("blog:sidebar", "ann") == "<li>ann</li><li>archive</li>"


def test_configure_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "addons.log"
    app = AddonApp(HookSettings(log_level="INFO", log_file=str(log_file), configure_logging=True))
    try:
        app.register("point", lambda: None)
        app.start()
        logger.complete()
        assert log_file.exists()
        assert "AddonApp started" in log_file.read_text(encoding="utf-8")
    finally:
        logger.remove()
