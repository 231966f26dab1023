import sys
from pathlib import Path

import pytest

# Add the src directory to the path to ensure imports work from the root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ragrouter.utils.config import ConfigurationError, RagRouterConfig

CONFIG_VARS = [
    "GEMINI_KEY",
    "TAVILY_KEY",
    "RAGROUTER_MODE",
    "RAGROUTER_ROUTER_FALLBACK",
    "RAGROUTER_CHUNK_SIZE",
    "RAGROUTER_MAX_RESULTS",
    "RAGROUTER_HISTORY_LIMIT",
    "RAGROUTER_DOCUMENTS_DIR",
    "RAGROUTER_LOG_REQUESTS",
]


@pytest.fixture
def config(monkeypatch, tmp_path):
    """A config reading a clean environment and an empty .env file."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return RagRouterConfig(str(env_file))


def test_defaults(config):
    assert config.mode == "router"
    assert config.model_name == "gemini-2.5-flash"
    assert config.temperature == 0.3
    assert config.chunk_size == 300
    assert config.chunk_overlap == 30
    assert config.max_results == 2
    assert config.history_limit == 10
    assert config.router_fallback == "do_not_route"
    assert config.log_requests is False


def test_missing_gemini_key_raises(config):
    with pytest.raises(ConfigurationError, match="GEMINI_KEY"):
        config.gemini_api_key


def test_blank_tavily_key_raises(config, monkeypatch):
    monkeypatch.setenv("TAVILY_KEY", "   ")
    with pytest.raises(ConfigurationError, match="TAVILY_KEY"):
        config.tavily_api_key


def test_validate_requires_tavily_only_in_router_mode(config, monkeypatch):
    monkeypatch.setenv("GEMINI_KEY", "gemini-secret")

    monkeypatch.setenv("RAGROUTER_MODE", "multi")
    config.validate()

    monkeypatch.setenv("RAGROUTER_MODE", "router")
    with pytest.raises(ConfigurationError, match="TAVILY_KEY"):
        config.validate()


def test_unknown_mode_raises(config, monkeypatch):
    monkeypatch.setenv("RAGROUTER_MODE", "telepathy")
    with pytest.raises(ConfigurationError, match="RAGROUTER_MODE"):
        config.mode


def test_env_overrides(config, monkeypatch):
    monkeypatch.setenv("RAGROUTER_MODE", "Single")
    monkeypatch.setenv("RAGROUTER_CHUNK_SIZE", "500")
    monkeypatch.setenv("RAGROUTER_LOG_REQUESTS", "yes")

    assert config.mode == "single"
    assert config.chunk_size == 500
    assert config.log_requests is True


def test_env_file_is_loaded(monkeypatch, tmp_path):
    # Registered with monkeypatch so the value load_dotenv sets is removed afterwards
    monkeypatch.setenv("RAGROUTER_MAX_RESULTS", "placeholder")
    monkeypatch.delenv("RAGROUTER_MAX_RESULTS")
    env_file = tmp_path / "custom.env"
    env_file.write_text("RAGROUTER_MAX_RESULTS=4\n")

    config = RagRouterConfig(str(env_file))

    assert config.max_results == 4


def test_document_sources(config, monkeypatch):
    monkeypatch.setenv("RAGROUTER_DOCUMENTS_DIR", "/srv/docs")

    sources = config.document_sources()

    assert [source.name for source in sources] == ["rag.pdf", "finance.pdf"]
    assert sources[0].path == Path("/srv/docs/rag.pdf")
    assert "Retrieval-Augmented Generation" in sources[0].description
    assert "finance" in sources[1].description


def test_to_dict_masks_secrets(config, monkeypatch):
    monkeypatch.setenv("GEMINI_KEY", "gemini-secret")

    values = config.to_dict()

    assert values["gemini_key"] == "***"
    assert values["tavily_key"] is None
    assert "gemini-secret" not in str(values)
