import logging

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.schemas.lint import LintReport
from app.services.post_validator import PostValidator
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/lint", response_model=LintReport)
def lint_posts(validator: PostValidator = Depends(deps.get_post_validator)):
    """Validate every post file under the posts directory."""
    try:
        return validator.validate_paths([settings.posts_path])
    except Exception as e:
        logger.error(f"Unexpected error validating posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to validate posts")
