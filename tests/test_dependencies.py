from pathlib import Path

from app import dependencies
from app.dependencies import (
    get_content_parser,
    get_post_validator,
    get_posts_repo,
    get_posts_service,
)
from app.repos.posts_repo import FilePostsRepo
from app.services.content_parser import ContentParser
from app.services.post_validator import PostValidator
from app.services.posts_service import PostsService
from app.settings import Settings


def test_get_content_parser_constructs_parser():
    assert isinstance(get_content_parser(), ContentParser)


def test_get_posts_repo_uses_settings_posts_path(monkeypatch):
    monkeypatch.setattr(
        dependencies, "settings", Settings(POSTS_DIR="_posts", SITE_ROOT="/srv/blog")
    )

    repo = get_posts_repo()

    assert isinstance(repo, FilePostsRepo)
    assert repo.posts_dir == Path("/srv/blog/_posts")


def test_get_posts_service_constructs_service():
    class FakeRepo:
        pass

    repo = FakeRepo()
    parser = ContentParser()
    svc = get_posts_service(repo=repo, parser=parser)

    assert isinstance(svc, PostsService)
    assert svc.repo is repo
    assert svc.parser is parser


def test_get_post_validator_uses_site_root(monkeypatch):
    monkeypatch.setattr(dependencies, "settings", Settings(SITE_ROOT="/srv/blog"))
    parser = ContentParser()

    validator = get_post_validator(parser=parser)

    assert isinstance(validator, PostValidator)
    assert validator.parser is parser
    assert validator.site_root == Path("/srv/blog")


def test_get_post_validator_without_site_root(monkeypatch):
    monkeypatch.setattr(dependencies, "settings", Settings(SITE_ROOT=""))

    assert get_post_validator(parser=ContentParser()).site_root is None
