import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.schemas.blog import AuthorSummary, PostSummary, TagSummary
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tags", response_model=List[TagSummary])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tags/{tag}", response_model=List[PostSummary])
def list_posts_for_tag(
    tag: str, service: PostsService = Depends(deps.get_posts_service)
):
    try:
        posts = service.list_posts(tag=tag)
    except Exception as e:
        logger.error(f"Unexpected error listing posts for tag {tag}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")
    if not posts:
        raise HTTPException(status_code=404, detail="Tag not found")
    return posts


@router.get("/authors", response_model=List[AuthorSummary])
def list_authors(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_authors()
    except Exception as e:
        logger.error(f"Unexpected error listing authors: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve authors")
