from contextlib import asynccontextmanager

import httpx
import structlog
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_injector import attach_injector

from api import router

from .di import create_injector
from .log_config import setup_logging
from .settings import Settings

load_dotenv()
settings = Settings()
setup_logging(dev_mode=settings.log_dev_mode, level=settings.log_level)
logger = structlog.get_logger("ytsportal")

injector = create_injector(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await injector.get(httpx.AsyncClient).aclose()


app = FastAPI(title="YTS Wrapper API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
attach_injector(app, injector)
app.include_router(router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


@app.get("/")
def root():
    return {"message": "YTS Wrapper API is running"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


def run():
    logger.info("Server starting", port=settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
