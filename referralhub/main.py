"""ReferralHub API.

Mounts the member and admin routers under /api/v1, adds rate limiting, security
headers and CORS, and starts the expired-pool scheduler when it is enabled.
"""
import asyncio
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from referralhub.config import settings
from referralhub.modules.auth import routes as auth_routes
from referralhub.modules.dashboard import routes as dashboard_routes
from referralhub.modules.network import routes as network_routes
from referralhub.modules.pools import routes as pools_routes
from referralhub.modules.ranks import routes as ranks_routes
from referralhub.modules.transactions import routes as transactions_routes
from referralhub.modules.p2p import routes as p2p_routes
from referralhub.modules.wallets import routes as wallets_routes
from referralhub.modules.notifications import routes as notifications_routes
from referralhub.modules.withdrawals import routes as withdrawals_routes
from referralhub.modules.deposits import routes as deposits_routes
from referralhub.modules.account import routes as account_routes
from referralhub.modules.global_turnover import routes as global_turnover_routes
from referralhub.modules.admin_dashboard import routes as admin_dashboard_routes
from referralhub.modules.admin_analytics import routes as admin_analytics_routes
from referralhub.modules.admin_finance import routes as admin_finance_routes
from referralhub.modules.admin_users import routes as admin_users_routes
from referralhub.modules.admin_withdrawals import routes as admin_withdrawals_routes
from referralhub.modules.admin_gas import routes as admin_gas_routes
from referralhub.modules.admin_notifications import routes as admin_notifications_routes
from referralhub.modules.admin_logs import routes as admin_logs_routes
from referralhub.modules.admin_admins import routes as admin_admins_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Member routes, then the admin console (each admin router checks its own permission)
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(dashboard_routes.router, prefix="/api/v1")
app.include_router(network_routes.router, prefix="/api/v1")
app.include_router(pools_routes.router, prefix="/api/v1")
app.include_router(ranks_routes.router, prefix="/api/v1")
app.include_router(transactions_routes.router, prefix="/api/v1")
app.include_router(p2p_routes.router, prefix="/api/v1")
app.include_router(wallets_routes.router, prefix="/api/v1")
app.include_router(notifications_routes.router, prefix="/api/v1")
app.include_router(withdrawals_routes.router, prefix="/api/v1")
app.include_router(deposits_routes.router, prefix="/api/v1")
app.include_router(account_routes.router, prefix="/api/v1")
app.include_router(global_turnover_routes.router, prefix="/api/v1")
app.include_router(admin_dashboard_routes.router, prefix="/api/v1")
app.include_router(admin_analytics_routes.router, prefix="/api/v1")
app.include_router(admin_finance_routes.router, prefix="/api/v1")
app.include_router(admin_users_routes.router, prefix="/api/v1")
app.include_router(admin_withdrawals_routes.router, prefix="/api/v1")
app.include_router(admin_gas_routes.router, prefix="/api/v1")
app.include_router(admin_notifications_routes.router, prefix="/api/v1")
app.include_router(admin_logs_routes.router, prefix="/api/v1")
app.include_router(admin_admins_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info(f"{settings.app_name} starting (production={settings.is_production})")

    if settings.pool_scheduler_enabled:
        from referralhub.modules.pools.scheduler import pool_scheduler_loop
        asyncio.create_task(pool_scheduler_loop())
        logger.info(
            f"Pool scheduler started - checking expired pools every "
            f"{settings.pool_scheduler_interval_seconds}s"
        )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"{settings.app_name} shutting down")


@app.get("/")
async def root():
    return {"service": settings.app_name, "api": "/api/v1", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Ready once the Supabase URL and service-role key are configured."""
    if not settings.supabase_url or not settings.supabase_service_role_key:
        return JSONResponse(status_code=503, content={"status": "not ready", "detail": "Supabase is not configured"})
    return {"status": "ready"}
