import textwrap
from pathlib import Path

import pytest

from app.repos.posts_repo import slug_for


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    Paths are fake; FakeParser resolves content by path name.
    """

    def __init__(self, names):
        self.posts_dir = Path("_posts")
        self.names = list(names)

    def list_post_paths(self):
        return [self.posts_dir / name for name in self.names]

    def get_post_path(self, slug):
        for path in self.list_post_paths():
            if self.slug_for(path) == slug:
                return path
        return None

    def relative_id(self, path):
        return path.relative_to(self.posts_dir).as_posix()

    def slug_for(self, path):
        return slug_for(path.relative_to(self.posts_dir))


class FakeParser:
    """
    Minimal markdown/content parser stand-in.
    """

    def __init__(self, content_by_name: dict[str, str]):
        self.content_by_name = content_by_name
        self.calls = []

    def get_markdown_content(self, path) -> str | None:
        self.calls.append(Path(path).name)
        raw = self.content_by_name.get(Path(path).name)
        if raw is None:
            return None
        return textwrap.dedent(raw).lstrip()


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        tags_return=None,
        authors_return=None,
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._tags_return = tags_return or []
        self._authors_return = authors_return or []
        self.list_calls = []

    def list_posts(self, include_drafts=True, tag=None, author=None):
        self.list_calls.append(
            {"include_drafts": include_drafts, "tag": tag, "author": author}
        )
        return self._list_posts_return

    def get_post(self, slug: str):
        return self._get_post_return

    def list_tags(self):
        return self._tags_return

    def list_authors(self):
        return self._authors_return


@pytest.fixture
def write_post(tmp_path):
    """Write a dedented post file under tmp_path/_posts and return its path."""
    posts_dir = tmp_path / "_posts"

    def _write(name: str, text: str) -> Path:
        path = posts_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    _write.posts_dir = posts_dir
    return _write
