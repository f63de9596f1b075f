from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from checkout_api.api.errors import register_exception_handlers
from checkout_api.api.routers import checkout, webhooks
from checkout_api.shared.config import get_settings


settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="NeuroSphere Checkout API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

# Root paths plus the /api paths the serverless deployment used.
for prefix in ("", "/api"):
    app.include_router(checkout.router, prefix=prefix)
    app.include_router(webhooks.router, prefix=prefix)
