import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from kolaypanel.config import settings
from kolaypanel.exceptions import KolayPanelError
from kolaypanel.logging_config import setup_logging
from kolaypanel.rate_limit import limiter
from kolaypanel.routers import (
    auth,
    billers,
    blog_api,
    customers,
    dashboard_api,
    finance_api,
    inventory_api,
    invoices_api,
    landing_api,
    staff_api,
)

# Loglama sistemini baslat (uygulama ayaga kalkmadan once)
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Kucuk isletmeler icin fatura, stok ve muhasebe paneli",
    version="0.1.0",
)

logger.info("%s uygulamasi baslatiliyor...", settings.APP_NAME)

# slowapi'yi FastAPI state'e bagla
app.state.limiter = limiter

# ---------------------------------------------------------------------------
# CORS Ayarlari
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


# ---------------------------------------------------------------------------
# Guvenlik Header'lari Middleware
# ---------------------------------------------------------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Her yanita guvenlik header'lari ekler."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


# ---------------------------------------------------------------------------
# Hata Handler'lari
# ---------------------------------------------------------------------------
@app.exception_handler(KolayPanelError)
async def kolaypanel_error_handler(request: Request, exc: KolayPanelError):
    """Uygulama hatalarini {error, detail, details} formatinda dondur."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s: %s (%s %s)", exc.error_code, exc.message, request.method, request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Rate limit asildiginda kullaniciya uygun hata mesaji dondur."""
    logger.warning("Rate limit asildi: %s %s", request.method, request.url)
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Cok fazla istek gonderdiniz. Lutfen biraz bekleyip tekrar deneyin.",
            "retry_after": exc.detail,
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning("HTTP %d hatasi: %s %s", exc.status_code, request.method, request.url)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Yakalanmamis hatalar: detay loglanir, kullaniciya genel mesaj doner."""
    logger.error("Yakalanmamis hata: %s %s", request.method, request.url, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Beklenmeyen bir hata olustu"},
    )


# API Router'lari
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Kimlik Dogrulama"])
app.include_router(dashboard_api.router, prefix="/api/v1/dashboard", tags=["Panel"])
app.include_router(customers.router, prefix="/api/v1/customers", tags=["Musteriler"])
app.include_router(billers.router, prefix="/api/v1/billers", tags=["Faturalayanlar"])
app.include_router(invoices_api.router, prefix="/api/v1/invoices", tags=["Faturalar"])
app.include_router(inventory_api.router, prefix="/api/v1/inventory", tags=["Stok"])
app.include_router(staff_api.router, prefix="/api/v1/staff", tags=["Personel ve Bordro"])
app.include_router(finance_api.router, prefix="/api/v1/finance", tags=["Gelir Gider"])
app.include_router(blog_api.router, prefix="/api/v1/blogs", tags=["Blog"])
app.include_router(landing_api.router, prefix="/api/v1/landing", tags=["Landing Sayfasi"])


@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok", "app": settings.APP_NAME}
