import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from scriptvision.config import (
    IMAGE_GENERATION_MODEL,
    PROMPT_GENERATION_MODEL,
    GeminiConfig,
    build_logging_config,
    configure_logging,
)
from scriptvision.errors import ConfigurationError

ENV_VARS = ("API_KEY", "GEMINI_API_KEY", "PROMPT_GENERATION_MODEL", "IMAGE_GENERATION_MODEL")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so teardown also removes values load_dotenv adds
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # keep load_dotenv away from any .env in the working tree
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_missing_key_fails_fast(clean_env, tmp_path):
    with pytest.raises(ConfigurationError, match="API_KEY environment variable not set"):
        GeminiConfig.from_env(str(tmp_path / "missing.env"))


def test_empty_key_rejected():
    with pytest.raises(ConfigurationError):
        GeminiConfig(api_key="")


def test_reads_api_key_and_defaults(clean_env, tmp_path):
    clean_env.setenv("API_KEY", "abc123")

    config = GeminiConfig.from_env(str(tmp_path / "missing.env"))

    assert config.api_key == "abc123"
    assert config.prompt_model == PROMPT_GENERATION_MODEL
    assert config.image_model == IMAGE_GENERATION_MODEL


def test_gemini_api_key_fallback_and_model_overrides(clean_env, tmp_path):
    clean_env.setenv("GEMINI_API_KEY", "fallback")
    clean_env.setenv("PROMPT_GENERATION_MODEL", "gemini-2.5-pro")
    clean_env.setenv("IMAGE_GENERATION_MODEL", "imagen-4.0-generate-001")

    config = GeminiConfig.from_env(str(tmp_path / "missing.env"))

    assert config == GeminiConfig("fallback", "gemini-2.5-pro", "imagen-4.0-generate-001")


def test_loads_env_file(clean_env, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("API_KEY=from-file\n")

    assert GeminiConfig.from_env(str(env_file)).api_key == "from-file"


def test_finds_env_file_in_working_directory(clean_env, tmp_path):
    (tmp_path / ".env").write_text("API_KEY=from-cwd\nPROMPT_GENERATION_MODEL=gemini-2.5-pro\n")
    project_dir = tmp_path / "scripts" / "episode-1"
    project_dir.mkdir(parents=True)
    clean_env.chdir(project_dir)

    config = GeminiConfig.from_env()

    assert config.api_key == "from-cwd"
    assert config.prompt_model == "gemini-2.5-pro"


def test_repr_hides_key():
    assert "secret" not in repr(GeminiConfig(api_key="secret"))


def test_logging_config_adds_file_handler(tmp_path):
    log_file = str(tmp_path / "run.log")

    config = build_logging_config("DEBUG", log_file)

    assert config["handlers"]["console"]["class"] == "rich.logging.RichHandler"
    assert config["handlers"]["file"]["filename"] == log_file
    assert config["loggers"][""]["handlers"] == ["console", "file"]
    assert config["loggers"][""]["level"] == "DEBUG"


def test_configure_logging_sets_root_level(monkeypatch):
    monkeypatch.delenv("LOG_FILE", raising=False)
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        configure_logging("WARNING")
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)


def test_logging_config_shares_console():
    console = Console(record=True)

    config = build_logging_config("INFO", None, console)

    assert config["handlers"]["console"]["console"] is console


def test_configure_logging_logs_through_given_console(monkeypatch):
    monkeypatch.delenv("LOG_FILE", raising=False)
    console = Console(record=True, width=200)
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        configure_logging("INFO", console=console)
        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]

        logging.getLogger("scriptvision.image_generator").info("Generated image (12 bytes, 16:9)")

        assert [h.console for h in rich_handlers] == [console]
        assert "Generated image (12 bytes, 16:9)" in console.export_text()
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
