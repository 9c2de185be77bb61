from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Asistencia Cosmos"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Database URL (read from .env file)
    DATABASE_URL: str = ''

    # JWT Authentication settings
    JWT_SECRET_KEY: str = 'default-secret-key-change-in-production'
    JWT_ALGORITHM: str = 'HS256'
    SESSION_TTL_HOURS: int = 8

    # Login throttling
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_LOCKOUT_MINUTES: int = 15
    AUDIT_LOG_SIZE: int = 1000

    # Client URL for CORS
    CLIENT_URL: str = 'http://localhost:5173'
    ADDITIONAL_CORS_ORIGINS: str = ''
    ALLOW_ALL_ORIGINS: bool = False

    # Company and attendance rules
    COMPANY_NAME: str = 'V&D COSMOS S.R.L.'
    COMPANY_RUC: str = '20609799090'
    TIMEZONE: str = 'America/Lima'
    DEFAULT_LOCATION: str = 'Oficina Principal'
    LATE_ARRIVAL_HOUR: int = 9
    REGULAR_HOURS_PER_DAY: int = 8

    # Initial admin (created on startup when the admins table is empty)
    INITIAL_ADMIN_NAME: str = 'Administrador Principal'
    INITIAL_ADMIN_PIN: str = '999888'

    # Google Sheets mirror
    SHEETS_ENABLED: bool = False
    GOOGLE_CLIENT_EMAIL: str = ''
    GOOGLE_PRIVATE_KEY: str = ''
    GOOGLE_DRIVE_FOLDER_ID: str = ''
    GOOGLE_DETAILED_SHEET_ID: str = ''
    GOOGLE_SUNAFIL_SHEET_ID: str = ''

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

    @property
    def ACCESS_TOKEN_EXPIRE_MINUTES(self) -> int:
        return self.SESSION_TTL_HOURS * 60

    @property
    def GOOGLE_PRIVATE_KEY_PEM(self) -> str:
        # .env files usually carry the key with escaped newlines
        return self.GOOGLE_PRIVATE_KEY.replace('\\n', '\n')

    @staticmethod
    def _with_psycopg(url: str) -> str:
        # SQLAlchemy needs the driver named for psycopg3
        if url.startswith("postgresql://") or url.startswith("postgres://"):
            return "postgresql+psycopg://" + url.split("://", 1)[1]
        return url

    @property
    def DB_URL(self):
        if self.ENV_MODE == "dev":
            return self._with_psycopg(self.DEV_DB_URL)
        else:
            if self.DATABASE_URL:
                return self._with_psycopg(self.DATABASE_URL)
            else:
                return '{}+psycopg://{}:{}@{}:{}/{}'.format(
                    self.DB_ENGINE,
                    self.DB_USERNAME,
                    self.DB_PASS,
                    self.DB_HOST,
                    self.DB_PORT,
                    self.DB_NAME
                )

class DevSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'dev'

    # Database settings for development
    @property
    def DEV_DB_URL(self) -> str:
        # Use DATABASE_URL from .env when provided, otherwise a local SQLite file
        return self.DATABASE_URL if self.DATABASE_URL else "sqlite:///./dev.db"

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

class ProdSettings(Settings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'prod'

    # Database settings for production
    DB_ENGINE: str = ''
    DB_USERNAME: str = ''
    DB_PASS: str = ''
    DB_HOST: str = ''
    DB_PORT: str = ''
    DB_NAME: str = ''

    model_config = SettingsConfigDict(env_file=".env", extra='allow')

def get_settings(env_mode: str = "dev"):
    if env_mode == "dev":
        return DevSettings()
    return ProdSettings()
