import pytest

import sprout.config


@pytest.fixture(autouse=True)
def fresh_config(tmp_path, monkeypatch):
    """Isolate every test from the user's config file and SPROUT_* env."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in ("SPROUT_INDENT_WIDTH", "SPROUT_TEXT_MARKER", "SPROUT_COMMENT_PREFIX",
                "SPROUT_TRAILING_NEWLINE", "SPROUT_LIMIT"):
        monkeypatch.delenv(key, raising=False)
    sprout.config._config = None
    yield
    sprout.config._config = None
