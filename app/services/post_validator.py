import logging
import re
from collections import defaultdict
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from app.repos.posts_repo import FilePostsRepo, slug_for
from app.schemas.front_matter import FrontMatter
from app.schemas.lint import LintIssue, LintReport, Severity
from app.services.content_parser import ContentParser
from app.services.front_matter import (
    FrontMatterError,
    parse_front_matter,
    parse_post_date,
    split_post_filename,
)
from app.services.image_service import missing_local_images

logger = logging.getLogger(__name__)

RECOGNIZED_KEYS = frozenset(
    {"layout", "title", "date", "author", "tags", "permalink", "reviewers"}
)
TOLERATED_KEYS = frozenset(
    {
        "categories",
        "category",
        "excerpt",
        "image",
        "description",
        "draft",
        "published",
        "updated",
        "comments",
    }
)

SHAPE_MESSAGES = {
    "author": "'author' should be a non-empty string",
    "tags": "'tags' should be a string or a list of strings",
    "reviewers": "'reviewers' should be a string or a list of strings",
}

_PERMALINK_PATTERN = re.compile(r"^/[^\s?#]*$")


def is_valid_permalink(value) -> bool:
    """A root-relative URL path; Jekyll placeholders like ``:title`` are fine."""
    if not isinstance(value, str) or not _PERMALINK_PATTERN.match(value):
        return False
    if "//" in value:
        return False
    return ".." not in value.split("/")


class PostValidator:
    """
    Structural checks for post files: the front matter block, the required
    ``title``/``date`` fields and the shape of the optional keys.
    """

    def __init__(
        self,
        parser: Optional[ContentParser] = None,
        site_root: Optional[Path] = None,
    ):
        self.parser = parser or ContentParser()
        self.site_root = Path(site_root) if site_root else None

    def validate_paths(self, paths: Iterable[Path]) -> LintReport:
        report = LintReport()
        posts = collect_posts(paths)
        for path, _slug in posts:
            report.checked += 1
            report.issues.extend(self.validate_file(path))
        report.issues.extend(duplicate_slug_issues(posts))
        logger.info(
            f"Checked {report.checked} posts: {report.errors} errors, {report.warnings} warnings"
        )
        return report

    def validate_file(self, path: Path) -> List[LintIssue]:
        text = self.parser.get_markdown_content(path)
        if text is None:
            return [_issue(path, "unreadable", Severity.ERROR, "File could not be read")]
        return self.validate_text(path, text)

    def validate_text(self, path: Path, text: str) -> List[LintIssue]:
        try:
            metadata, body = parse_front_matter(text)
        except FrontMatterError as e:
            return [_issue(path, e.rule, Severity.ERROR, str(e))]

        issues = []
        issues.extend(self._check_title(path, metadata))
        issues.extend(self._check_date(path, metadata))
        issues.extend(self._check_permalink(path, metadata))
        issues.extend(self._check_shapes(path, metadata))
        issues.extend(self._check_unknown_keys(path, metadata))

        if not body.strip():
            issues.append(
                _issue(path, "body-empty", Severity.WARNING, "Post has no content")
            )
        elif self.site_root:
            for src in missing_local_images(body, self.site_root):
                issues.append(
                    _issue(
                        path,
                        "image-missing",
                        Severity.WARNING,
                        f"Image {src} not found under {self.site_root}",
                    )
                )
        return issues

    def _check_title(self, path, metadata):
        title = metadata.get("title")
        if title is None or not str(title).strip():
            yield _issue(path, "title-missing", Severity.ERROR, "Missing 'title'")

    def _check_date(self, path, metadata):
        value = metadata.get("date")
        if value is None or (isinstance(value, str) and not value.strip()):
            yield _issue(path, "date-missing", Severity.ERROR, "Missing 'date'")
            return
        try:
            post_date = parse_post_date(value)
        except ValueError:
            yield _issue(
                path,
                "date-invalid",
                Severity.ERROR,
                f"'date' is not an ISO-8601 timestamp: {value!r}",
            )
            return

        file_date, _ = split_post_filename(Path(path).name)
        if file_date and file_date != post_date.date():
            yield _issue(
                path,
                "filename-date-mismatch",
                Severity.WARNING,
                f"Filename date {file_date.isoformat()} differs from 'date' {post_date.date().isoformat()}",
            )

    def _check_permalink(self, path, metadata):
        if "permalink" not in metadata:
            return
        value = metadata["permalink"]
        if not is_valid_permalink(value):
            yield _issue(
                path,
                "permalink-invalid",
                Severity.ERROR,
                f"'permalink' is not a valid URL path: {value!r}",
            )

    def _check_shapes(self, path, metadata):
        shaped = {key: metadata[key] for key in SHAPE_MESSAGES if key in metadata}
        try:
            FrontMatter(**shaped)
        except ValidationError as e:
            # a union reports one error per branch; keep one issue per field
            failed = list(dict.fromkeys(str(err["loc"][0]) for err in e.errors()))
            for key in failed:
                yield _issue(
                    path,
                    f"{key}-invalid",
                    Severity.WARNING,
                    f"{SHAPE_MESSAGES[key]}: {metadata[key]!r}",
                )

    def _check_unknown_keys(self, path, metadata):
        for key in metadata:
            if key not in RECOGNIZED_KEYS and key not in TOLERATED_KEYS:
                yield _issue(
                    path, "unknown-key", Severity.INFO, f"Unrecognized key {key!r}"
                )


def collect_posts(paths: Iterable[Path]) -> List[Tuple[Path, str]]:
    """
    Pair every post file with its slug. Directories are listed through
    ``FilePostsRepo`` so lint sees exactly the files the catalog serves.
    """
    collected = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            repo = FilePostsRepo(path)
            collected.extend((p, repo.slug_for(p)) for p in repo.list_post_paths())
        else:
            collected.append((path, slug_for(Path(path.name))))
    return collected


def expand_paths(paths: Iterable[Path]) -> List[Path]:
    """Expand directories into the post files they contain."""
    return [path for path, _slug in collect_posts(paths)]


def duplicate_slug_issues(posts: List[Tuple[Path, str]]) -> List[LintIssue]:
    by_slug = defaultdict(list)
    for path, slug in posts:
        by_slug[slug].append(path)

    issues = []
    for slug, paths in by_slug.items():
        if len(paths) < 2:
            continue
        for path in paths:
            others = ", ".join(str(p) for p in paths if p != path)
            issues.append(
                _issue(
                    path,
                    "slug-duplicate",
                    Severity.ERROR,
                    f"Slug {slug!r} is also used by {others}",
                )
            )
    return issues


def _issue(path, rule: str, severity: Severity, message: str) -> LintIssue:
    return LintIssue(path=str(path), rule=rule, severity=severity, message=message)
