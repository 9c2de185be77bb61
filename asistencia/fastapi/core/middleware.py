import logging
from typing import List
from fastapi.middleware.cors import CORSMiddleware
from asistencia.fastapi.core.init_settings import global_settings

logger = logging.getLogger(__name__)

# Vite dev server of the punch terminal
LOCAL_FRONTENDS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def cors_origins(settings=global_settings) -> List[str]:
    """Allowed origins: the client URL, local front ends and any extras."""
    origins = [settings.CLIENT_URL, *LOCAL_FRONTENDS]
    origins += [o.strip() for o in settings.ADDITIONAL_CORS_ORIGINS.split(",")]
    return sorted({o for o in origins if o})


def setup_cors(app, settings=global_settings):
    if settings.ALLOW_ALL_ORIGINS:
        logger.warning("CORS open to every origin; credentials disabled")
        origins = ["*"]
        allow_credentials = False
    else:
        origins = cors_origins(settings)
        allow_credentials = True

    logger.info("CORS allowed origins: %s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        # Downloads need the filename, lockouts the wait time
        expose_headers=["Content-Disposition", "Retry-After"]
    )
