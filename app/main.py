import logging

from fastapi import Depends, FastAPI

from app.routers import lint, posts, taxonomy
from app.security import get_api_key
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog Posts API", description="Front matter catalog and lint")

app.include_router(posts.router, dependencies=[Depends(get_api_key)])
app.include_router(taxonomy.router, dependencies=[Depends(get_api_key)])
app.include_router(lint.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    logger.debug(f"Serving posts from {settings.posts_path}")
    return {"message": "Blog Posts API is running"}
