"""FastAPI application setup for the ambient display backend."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Ambient Display")


@app.get("/health")
def health():
    """Liveness probe for the kiosk launcher."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
