import logging
import os

import pytest

from relalg.config import Settings
from relalg.result import Err, Ok


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    for name in ("RELALG_LOG_LEVEL", "RELALG_MEMOIZE", "RELALG_DISPLAY_LIMIT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    match Settings.from_env():
        case Ok(settings):
            assert settings == Settings()
            assert settings.log_level == logging.WARNING
        case Err(e):
            pytest.fail(f"Expected Ok, got Err: {e}")


def test_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELALG_LOG_LEVEL", "debug")
    monkeypatch.setenv("RELALG_MEMOIZE", "yes")
    monkeypatch.setenv("RELALG_DISPLAY_LIMIT", "5")
    result = Settings.from_env()
    assert result == Ok(Settings(log_level=logging.DEBUG, memoize=True, display_limit=5))


def test_from_dotenv_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("RELALG_DISPLAY_LIMIT=7\n")
    result = Settings.from_env()
    os.environ.pop("RELALG_DISPLAY_LIMIT", None)
    assert isinstance(result, Ok)
    assert result.value.display_limit == 7


@pytest.mark.parametrize(
    "name, value, fragment",
    [
        ("RELALG_LOG_LEVEL", "LOUD", "unknown level"),
        ("RELALG_MEMOIZE", "maybe", "expected a boolean"),
        ("RELALG_DISPLAY_LIMIT", "ten", "expected an integer"),
        ("RELALG_DISPLAY_LIMIT", "0", "must be positive"),
    ],
)
def test_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str, fragment: str) -> None:
    monkeypatch.setenv(name, value)
    match Settings.from_env():
        case Err(e):
            assert fragment in str(e)
        case Ok(settings):
            pytest.fail(f"Expected Err, got Ok: {settings}")
