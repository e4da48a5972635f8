"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from ddtrace import patch_all
from fastapi import FastAPI

from dependencies import get_http_client
from routes import cancel_attempts, transcriptions_router

patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await cancel_attempts()
    await get_http_client().aclose()


app = FastAPI(title="Sum-Meet-Script", lifespan=lifespan)
app.include_router(transcriptions_router)
