import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings

# Configure root logger to show our application modules at the configured level
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# Suppress noisy third-party loggers
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

from app.core.database import engine, Base
from app.api import auth, health
from app.api import accounts as accounts_api
from app.api import trades as trades_api
from app.api import journals as journals_api
from app.api import dashboard as dashboard_api

# Import all models so Base.metadata knows about them
from app.models import user, account, trade, journal  # noqa: F401

# Create all tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
)

# CORS: production uses FRONTEND_URL env var; dev adds localhost origins
_cors_origins = [settings.FRONTEND_URL]
if settings.DEBUG:
    _cors_origins += ["http://localhost:3000", "http://127.0.0.1:5173"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Validation errors omit the rejected input: a NaN there is not valid JSON
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


# Routes
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(accounts_api.router)
app.include_router(trades_api.router)
app.include_router(journals_api.router)
app.include_router(dashboard_api.router)

logging.getLogger(__name__).info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
