"""Catering FastAPI application.

Web server that processes order commands synchronously via HTTP. Every
request under ``/orders`` runs inside the catering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from catering.domain import catering  # noqa: E402
from catering.utils.logging import add_context, clear_context
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

catering.init()


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Catering Orders API",
    description="Catering order placement, status lifecycle and audit trail",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the catering domain context for order requests.

    The caller's identity is bound to the log context for the duration of
    the request, so handler log lines carry it.
    """
    if request.url.path.startswith("/orders"):
        add_context(
            user_id=request.headers.get("x-user-id"),
            user_role=request.headers.get("x-user-role"),
            method=request.method,
            path=request.url.path,
        )
        try:
            with catering.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catering.api import order_router, register_error_handlers  # noqa: E402

app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": catering.name})
