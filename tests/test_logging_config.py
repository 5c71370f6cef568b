import logging

import pytest

from site_builder.logging_config import setup_logging
from site_builder.version import get_app_version


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_writes_to_log_dir(tmp_path, monkeypatch, restore_logging):
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("SITE_BUILDER_LOG_DIR", str(log_dir))
    setup_logging()
    logging.getLogger("site_builder.test").warning("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello from test" in (log_dir / "app.log").read_text(encoding="utf-8")


def test_debug_override(tmp_path, monkeypatch, restore_logging):
    monkeypatch.setenv("SITE_BUILDER_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("SITE_BUILDER_DEBUG_MODULES", "site_builder.custom")
    setup_logging()
    assert logging.getLogger("site_builder.custom").level == logging.DEBUG


def test_version_string():
    assert get_app_version().startswith("v")
