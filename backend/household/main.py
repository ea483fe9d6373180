from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import api_router
from .config import get_ledger_path
from .database import open_ledger, close_ledger, is_ledger_open, get_current_ledger_path


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    if not is_ledger_open():
        open_ledger(get_ledger_path())
    yield
    # Cleanup on shutdown
    close_ledger()


app = FastAPI(
    title="Household Budget",
    description="Shared monthly budget for a two-person household",
    version=__version__,
    lifespan=lifespan
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],  # Next.js dev server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
def health_check():
    """Health check endpoint."""
    path = get_current_ledger_path()
    return {"status": "ok", "ledger": str(path) if path else None}
