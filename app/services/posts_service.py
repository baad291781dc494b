import datetime
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Callable, List, Optional

from app.schemas.blog import AuthorSummary, PostDetail, PostSummary, TagSummary
from app.services.content_parser import ContentParser
from app.services.front_matter import (
    FrontMatterError,
    load_post,
    parse_post_date,
    split_post_filename,
)
from app.services.image_service import process_image_references
from app.settings import settings
from app.utils import calculate_reading_time

logger = logging.getLogger(__name__)

_TAG_SEPARATORS = re.compile(r"[\s,]+")


class PostsService:
    def __init__(
        self,
        repo,
        parser: Optional[ContentParser] = None,
        *,
        site_url: Optional[str] = None,
        words_per_minute: Optional[int] = None,
        process_image_refs: Optional[Callable[[str, str], str]] = None,
    ):
        self.repo = repo
        self.parser = parser or ContentParser()
        self.site_url = site_url if site_url is not None else settings.SITE_URL
        self.words_per_minute = words_per_minute or settings.WORDS_PER_MINUTE
        self.process_image_refs = process_image_refs or process_image_references

    def list_posts(
        self,
        include_drafts: bool = True,
        tag: Optional[str] = None,
        author: Optional[str] = None,
    ) -> List[PostSummary]:
        posts = []
        for path in self.repo.list_post_paths():
            post_data = self._parse(path, include_content=False)
            if not post_data:
                continue
            if not include_drafts and post_data["draft"]:
                continue
            if tag and tag.strip().lower() not in post_data["tags"]:
                continue
            if author and (post_data["author"] or "").lower() != author.lower():
                continue
            posts.append(post_data)

        posts.sort(key=lambda p: _sort_key(p.pop("_sort_date")), reverse=True)
        return [PostSummary(**p) for p in posts]

    def get_post(self, slug: str) -> Optional[PostDetail]:
        path = self.repo.get_post_path(slug)
        if not path:
            return None
        post_data = self._parse(path, include_content=True)
        if not post_data:
            return None
        post_data.pop("_sort_date")
        return PostDetail(**post_data)

    def list_tags(self, include_drafts: bool = True) -> List[TagSummary]:
        counts = Counter(
            tag
            for post in self.list_posts(include_drafts=include_drafts)
            for tag in post.tags
        )
        return [TagSummary(tag=t, count=c) for t, c in _ranked(counts)]

    def list_authors(self, include_drafts: bool = True) -> List[AuthorSummary]:
        counts = Counter(
            post.author
            for post in self.list_posts(include_drafts=include_drafts)
            if post.author
        )
        return [AuthorSummary(author=a, count=c) for a, c in _ranked(counts)]

    def _parse(self, path: Path, include_content: bool) -> Optional[dict]:
        return parse_post_data(
            path,
            post_id=self.repo.relative_id(path),
            slug=self.repo.slug_for(path),
            include_content=include_content,
            parser=self.parser,
            site_url=self.site_url,
            words_per_minute=self.words_per_minute,
            process_image_refs=self.process_image_refs,
        )


def parse_post_data(
    path: Path,
    post_id: str,
    slug: str,
    include_content: bool = False,
    *,
    parser,
    site_url: str = "",
    words_per_minute: int = 200,
    process_image_refs: Callable[[str, str], str] = process_image_references,
) -> Optional[dict]:
    """Parse front matter and return standardized post data"""
    try:
        markdown = parser.get_markdown_content(path)
        if not markdown:
            logger.warning(f"No markdown content found for post {slug}")
            return None

        parsed = load_post(markdown)
        metadata = parsed.metadata

        post_date = _resolve_date(metadata.get("date"), path.name, slug)
        post_data = {
            "id": post_id,
            "slug": slug,
            "title": _derive_title(metadata, slug),
            "layout": _optional_str(metadata.get("layout")),
            "author": _optional_str(metadata.get("author")),
            "date": post_date.isoformat() if post_date else None,
            "permalink": _optional_str(metadata.get("permalink")),
            "tags": normalize_tags(metadata.get("tags")),
            "reviewers": normalize_reviewers(metadata.get("reviewers")),
            "readingTime": calculate_reading_time(parsed.content, words_per_minute),
            "draft": _is_draft(metadata),
            "_sort_date": post_date,
        }

        if include_content:
            post_data["content"] = process_image_refs(parsed.content, site_url)

        return post_data
    except FrontMatterError as e:
        logger.warning(f"Skipping post {slug}: {e}")
        return None
    except Exception as e:
        logger.warning(f"Failed to parse post {slug}: {e}")
        return None


def normalize_tags(value) -> List[str]:
    """
    Jekyll accepts either a list or a single space separated string.
    Tags are lowercased so filtering and counting agree.
    """
    if not value:
        return []
    if isinstance(value, str):
        items = _TAG_SEPARATORS.split(value)
    elif isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value if item is not None]
    else:
        items = [str(value)]
    tags = (item.strip().lower() for item in items)
    return list(dict.fromkeys(tag for tag in tags if tag))


def normalize_reviewers(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value if item]
    return [str(value)]


def _resolve_date(value, filename: str, slug: str) -> Optional[datetime.datetime]:
    if value:
        try:
            return parse_post_date(value)
        except ValueError:
            logger.warning(f"Post {slug} has an unparseable date: {value!r}")
    file_date, _ = split_post_filename(filename)
    if file_date:
        return datetime.datetime(file_date.year, file_date.month, file_date.day)
    return None


def _sort_key(value: Optional[datetime.datetime]) -> datetime.datetime:
    if value is None:
        return datetime.datetime.min
    if value.tzinfo is not None:
        return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value


def _derive_title(metadata: dict, slug: str) -> str:
    title = metadata.get("title")
    if title and str(title).strip():
        return str(title).strip()
    clean_slug = slug.rsplit("/", 1)[-1]
    clean_slug = clean_slug.replace("-", " ").replace("_", " ")
    return clean_slug.title()


def _optional_str(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_draft(metadata: dict) -> bool:
    return metadata.get("draft") is True or metadata.get("published") is False


def _ranked(counts: Counter):
    return sorted(counts.items(), key=lambda item: (-item[1], item[0].lower()))
