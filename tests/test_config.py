from asistencia.fastapi.core.config import DevSettings, ProdSettings, get_settings
from asistencia.fastapi.core.middleware import cors_origins


def test_dev_falls_back_to_sqlite():
    settings = DevSettings(DATABASE_URL="")
    assert settings.DB_URL == "sqlite:///./dev.db"


def test_postgres_urls_use_psycopg():
    settings = DevSettings(DATABASE_URL="postgresql://u:p@db:5432/asistencia")
    assert settings.DB_URL == "postgresql+psycopg://u:p@db:5432/asistencia"


def test_get_settings_picks_the_mode():
    assert isinstance(get_settings("dev"), DevSettings)
    assert isinstance(get_settings("prod"), ProdSettings)


def test_private_key_newlines_are_unescaped():
    settings = DevSettings(GOOGLE_PRIVATE_KEY="-----BEGIN-----\\nabc\\n-----END-----")
    assert settings.GOOGLE_PRIVATE_KEY_PEM == "-----BEGIN-----\nabc\n-----END-----"


def test_cors_origins():
    settings = DevSettings(
        CLIENT_URL="https://asistencia.example.com",
        ADDITIONAL_CORS_ORIGINS=" https://a.example.com, ,https://a.example.com",
    )
    assert cors_origins(settings) == [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
        "https://a.example.com",
        "https://asistencia.example.com",
    ]
