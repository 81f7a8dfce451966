import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from pinboard.api.v1.api import api_router
from pinboard.core.config import settings
from pinboard.services.geocoding_service import geocoding_service
from pinboard.services.map_renderer import render_map_page
from pinboard.services.map_session import MapSession, get_map_session
from pinboard.utils import logger as _  # noqa: F401 - Import to configure logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await geocoding_service.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("Starting %s version v%s", settings.PROJECT_NAME, settings.VERSION)

# Include API v1 router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/", response_class=HTMLResponse)
def read_root(session: MapSession = Depends(get_map_session)):
    """Serve the interactive map with every annotation drawn so far."""
    return render_map_page(session.map_surface.annotations())
