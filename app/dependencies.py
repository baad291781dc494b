from fastapi import Depends

from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser
from app.services.post_validator import PostValidator
from app.services.posts_service import PostsService
from app.settings import settings


def get_content_parser():
    return ContentParser()


def get_posts_repo():
    return FilePostsRepo(settings.posts_path)


def get_posts_service(
    repo=Depends(get_posts_repo),
    parser=Depends(get_content_parser),
):
    return PostsService(repo=repo, parser=parser)


def get_post_validator(parser=Depends(get_content_parser)):
    site_root = settings.SITE_ROOT or None
    return PostValidator(parser=parser, site_root=site_root)
