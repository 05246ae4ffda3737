from kanka.settings import KANKA_URL, KankaSettings


def test_defaults(monkeypatch):
    monkeypatch.delenv("KANKA_TOKEN", raising=False)
    monkeypatch.delenv("KANKA_BASE_URL", raising=False)
    monkeypatch.delenv("KANKA_TIMEOUT", raising=False)

    settings = KankaSettings(_env_file=None)

    assert settings.base_url == KANKA_URL
    assert settings.timeout == 30.0
    assert settings.token.get_secret_value() == ""


def test_from_environment(monkeypatch):
    monkeypatch.setenv("KANKA_TOKEN", "secret")
    monkeypatch.setenv("KANKA_BASE_URL", "https://kanka.test/api/1.0")
    monkeypatch.setenv("KANKA_TIMEOUT", "5")

    settings = KankaSettings(_env_file=None)

    assert settings.token.get_secret_value() == "secret"
    assert "secret" not in repr(settings)
    assert settings.base_url == "https://kanka.test/api/1.0/"
    assert settings.timeout == 5.0


def test_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("KANKA_TOKEN", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("KANKA_TOKEN=from-file\nOTHER_SETTING=ignored\n")

    settings = KankaSettings(_env_file=env_file)

    assert settings.token.get_secret_value() == "from-file"
