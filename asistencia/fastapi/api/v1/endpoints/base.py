from fastapi import APIRouter, Depends

from asistencia.fastapi.core.init_settings import global_settings
from asistencia.fastapi.schemas.sync import GoogleHealth

router = APIRouter()


def get_settings_dependency():
    return global_settings


@router.get("/")
async def root():
    return {"name": global_settings.APP_NAME, "version": global_settings.APP_VERSION}


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/api/health/google", response_model=GoogleHealth, summary="Google Credentials Check")
async def google_health(settings=Depends(get_settings_dependency)):
    """
    Report whether the service-account credentials are present.

    The key itself is never returned, only its length and whether it still
    has escaped newlines (a common .env mistake).
    """
    key_raw = settings.GOOGLE_PRIVATE_KEY or ""
    return GoogleHealth(
        enabled=settings.SHEETS_ENABLED,
        email_ok=bool(settings.GOOGLE_CLIENT_EMAIL),
        key_len=len(key_raw),
        has_escaped_newlines="\\n" in key_raw,
    )
