from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.database import create_db_and_tables
from .core.errors import CarpoolError
from .core.logging import configure_logging, get_logger
from .core.settings import settings
from .models.User import User # Import models to register them with SQLModel
from .models.RefreshToken import RefreshToken
from .auth.jwt_provider import JwtConfig

from .auth.router import router as auth_router
from .user.router import router as user_router

logger = get_logger("carpool.main")

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    # Fails startup when jwt.secret is missing or too short
    app.state.jwt_config = JwtConfig.from_settings(settings)
    create_db_and_tables()
    logger.info("Application started", project=settings.PROJECT_NAME)
    yield



app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.include_router(auth_router)
app.include_router(user_router)

@app.exception_handler(CarpoolError)
async def carpool_error_handler(request: Request, exc: CarpoolError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
        headers=headers,
    )

@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
