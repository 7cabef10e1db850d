from pathlib import Path

from blogcore.settings import Settings, choose_env_file


def test_couchdb_url_uses_environment():
    s = Settings(
        COUCHDB_USERNAME="u",
        COUCHDB_PASSWORD="p",
        COUCHDB_HOST="h",
        COUCHDB_PORT=1234,
    )
    assert s.couchdb_url == "http://u:p@h:1234"


def test_content_extensions_are_normalized():
    s = Settings(CONTENT_EXTENSIONS=" .MD, mdx ,,")
    assert s.content_extensions == (".md", ".mdx")


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("STRICT_LOAD", "false")
    monkeypatch.setenv("INCLUDE_DRAFTS", "true")
    monkeypatch.setenv("CONTENT_BACKEND", "couchdb")
    monkeypatch.setenv("HOME_PREVIEW_COUNT", "3")

    s = Settings()

    assert s.STRICT_LOAD is False
    assert s.INCLUDE_DRAFTS is True
    assert s.CONTENT_BACKEND == "couchdb"
    assert s.HOME_PREVIEW_COUNT == 3


def test_drafts_hidden_by_default(monkeypatch):
    monkeypatch.delenv("INCLUDE_DRAFTS", raising=False)
    assert Settings().INCLUDE_DRAFTS is False


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
