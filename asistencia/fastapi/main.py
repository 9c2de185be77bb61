import logging
from fastapi import FastAPI
from asistencia.fastapi.core.init_settings import global_settings
from asistencia.fastapi.core.lifespan import lifespan
from asistencia.fastapi.core.middleware import setup_cors
from asistencia.fastapi.core.routers import setup_routers
from asistencia.security.audit import AuditLog
from asistencia.security.rate_limit import InMemoryRateLimiter
from asistencia.security.sessions import InMemorySessionStore

logging.basicConfig(
    level=getattr(logging, global_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def create_app(settings=global_settings, sheets_mirror=None) -> FastAPI:
    """
    Build the application with fresh per-process stores.

    Args:
        settings: Application settings
        sheets_mirror: Pre-built mirror (tests pass a fake); otherwise the
            lifespan builds one from settings
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan
    )

    app.state.session_store = InMemorySessionStore(ttl_hours=settings.SESSION_TTL_HOURS)
    app.state.rate_limiter = InMemoryRateLimiter(
        max_attempts=settings.LOGIN_MAX_ATTEMPTS,
        lockout_minutes=settings.LOGIN_LOCKOUT_MINUTES
    )
    app.state.audit_log = AuditLog(max_entries=settings.AUDIT_LOG_SIZE)
    app.state.sheets_mirror = sheets_mirror

    setup_cors(app, settings)
    setup_routers(app)

    return app


app = create_app()
