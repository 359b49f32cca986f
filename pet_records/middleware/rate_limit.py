"""
Rate limiting de los endpoints de escritura usando slowapi
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from ..config import get_settings

limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)

def write_limit() -> str:
    # se lee en cada petición para poder cambiarlo sin reimportar routers
    return get_settings().write_rate_limit

async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Mismo sobre {success, error} que el resto de la API."""
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": f"Too many requests. Limit: {exc.detail}. Try again later."},
    )
