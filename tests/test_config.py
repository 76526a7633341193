from contact_board.core.config import Config


def test_allowed_origins_come_from_configured_list(monkeypatch):
    monkeypatch.setattr(Config, "CORS_ALLOWED_ORIGINS", " https://a.test , https://b.test,,https://a.test ")

    assert Config.allowed_origins() == ["https://a.test", "https://b.test"]


def test_allowed_origins_merge_extras_without_duplicates(monkeypatch):
    monkeypatch.setattr(Config, "CORS_ALLOWED_ORIGINS", "https://a.test")

    assert Config.allowed_origins(["https://c.test", "https://a.test"]) == ["https://a.test", "https://c.test"]


def test_service_key_preferred_over_anon_key(monkeypatch):
    monkeypatch.setattr(Config, "SUPABASE_ANON_KEY", "anon")
    monkeypatch.setattr(Config, "SUPABASE_SERVICE_KEY", "")
    assert Config.supabase_key() == "anon"

    monkeypatch.setattr(Config, "SUPABASE_SERVICE_KEY", "service")
    assert Config.supabase_key() == "service"
