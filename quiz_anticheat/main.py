# quiz_anticheat/main.py
import logging
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from .db import create_indexes
from .config import settings
from .routes import anti_cheat, exam_events
from .utils.logging_config import setup_logging
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = setup_logging(settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    await create_indexes()
    logger.info("DB indexes created")
    yield
    # shutdown
    logger.info("Shutting down...")

app = FastAPI(title="Quiz Anti-Cheat Service", version="1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"success": False, "message": exc.detail}, status_code=exc.status_code, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse({"success": False, "message": "Invalid request", "details": details}, status_code=400)

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("[ERROR] [%s] %s", request.method, request.url.path)
    return JSONResponse({"success": False, "message": "Internal server error"}, status_code=500)

app.include_router(exam_events.router)
app.include_router(anti_cheat.router)

@app.get("/health")
async def health():
    return JSONResponse({"status": "ok"})

if __name__ == "__main__":
    uvicorn.run("quiz_anticheat.main:app", host=settings.HOST, port=settings.PORT, reload=True)
