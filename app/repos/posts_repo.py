from pathlib import Path
from typing import List, Optional

from app.services.front_matter import split_post_filename

POST_EXTENSIONS = (".md", ".markdown")


def slug_for(relative_path: Path) -> str:
    _date, slug = split_post_filename(relative_path.name)
    parent = relative_path.parent.as_posix()
    return slug if parent == "." else f"{parent}/{slug}"


class FilePostsRepo:
    def __init__(self, posts_dir: Path):
        self.posts_dir = Path(posts_dir)

    def list_post_paths(self) -> List[Path]:
        if not self.posts_dir.is_dir():
            return []
        return sorted(
            path
            for path in self.posts_dir.rglob("*")
            if path.is_file()
            and path.suffix.lower() in POST_EXTENSIONS
            and not self._is_hidden(path)
        )

    def get_post_path(self, slug: str) -> Optional[Path]:
        slug = slug.strip("/")
        # date-prefixed names sort oldest first; a reused slug resolves to the newest post
        for path in reversed(self.list_post_paths()):
            if self.slug_for(path) == slug:
                return path
        return None

    def relative_id(self, path: Path) -> str:
        return path.relative_to(self.posts_dir).as_posix()

    def slug_for(self, path: Path) -> str:
        return slug_for(path.relative_to(self.posts_dir))

    def _is_hidden(self, path: Path) -> bool:
        parts = path.relative_to(self.posts_dir).parts
        return any(part.startswith((".", "_")) for part in parts)
