"""
Robusta café API.

Catalog (menu, artworks, artists, workshops), orders and Razorpay checkout,
Firebase sign-in, the virtual barista chat and the admin back-office routes.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

import database
from config import Config
from database import DatabaseUnavailable
from logger import get_logger
from routers import (
    artists, artworks, auth, chat, franchises, marketing, media,
    menu, orders, payments, reviews, synesthesia, users, workshops,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        database.ensure_indexes()
    except PyMongoError as e:
        logger.error("Could not create indexes: %s", e)
    yield


app = FastAPI(title="Robusta Café API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================== Error handling =====================
def error_body(message, error: str = None) -> dict:
    body = {"success": False}
    if isinstance(message, dict):
        body.update(message)
    else:
        body["message"] = message
    if error is not None:
        body["error"] = error
    if Config.is_production():
        body.pop("error", None)
    return body


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(error_body(exc.detail)))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors()]
    body = error_body("Validation error")
    body["errors"] = errors
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(DatabaseUnavailable)
async def database_exception_handler(request: Request, exc: DatabaseUnavailable):
    logger.error("Database unavailable: %s", exc)
    return JSONResponse(status_code=503, content=error_body("Database not available", str(exc)))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


# ===================== Routers =====================
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(menu.router, prefix="/api/menu", tags=["menu"])
app.include_router(artworks.router, prefix="/api/artworks", tags=["artworks"])
app.include_router(artists.router, prefix="/api/artists", tags=["artists"])
app.include_router(workshops.router, prefix="/api/workshops", tags=["workshops"])
app.include_router(media.router, prefix="/api/media", tags=["media"])
app.include_router(orders.router, prefix="/api/orders", tags=["orders"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(franchises.router, prefix="/api/franchises", tags=["franchises"])
app.include_router(marketing.router, prefix="/api/marketing", tags=["marketing"])
app.include_router(synesthesia.router, prefix="/api/synesthesia", tags=["synesthesia"])
app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
app.include_router(reviews.router, prefix="/api/google-reviews", tags=["reviews"])


# ===================== Public Endpoints =====================
@app.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/api")
def api_root():
    return {
        "message": "Robusta Café API",
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": None,
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": []
    }
    try:
        if database.db is not None:
            response["database"] = "✅ Available"
            response["connection_status"] = "Connected"
            response["collections"] = database.db.list_collection_names()
        else:
            response["database"] = "⚠️  Available but not initialized"
    except Exception as e:
        response["database"] = f"❌ Error: {str(e)[:80]}"
    response["database_url"] = "✅ Set" if Config.DATABASE_URL else "❌ Not Set"
    response["database_name"] = "✅ Set" if Config.DATABASE_NAME else "❌ Not Set"
    return response


if __name__ == "__main__":
    import uvicorn
    Config.debug_print()
    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)
