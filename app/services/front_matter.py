import datetime
import re
from typing import Optional, Tuple

import frontmatter
import yaml

OPENING_DELIMITER = "---"
CLOSING_DELIMITERS = ("---", "...")

# Jekyll's own date format alongside plain ISO-8601
_JEKYLL_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)
_FILENAME_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")

_yaml_handler = frontmatter.YAMLHandler()


class FrontMatterError(ValueError):
    """Raised when a post's front matter block is missing or malformed."""

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule


def split_front_matter(text: str) -> Tuple[str, str]:
    """
    Split a post into its raw YAML block and Markdown body.

    The block must open on the very first line and close on a later line
    holding only ``---`` (or ``...``).
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].rstrip() != OPENING_DELIMITER:
        raise FrontMatterError(
            "front-matter-missing", "File does not start with a '---' line"
        )

    for index in range(1, len(lines)):
        if lines[index].rstrip() in CLOSING_DELIMITERS:
            yaml_text = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return yaml_text, body

    raise FrontMatterError(
        "front-matter-unclosed", "Front matter has no closing '---' line"
    )


def load_metadata(yaml_text: str) -> dict:
    """Load a raw front matter block, insisting on a mapping."""
    try:
        metadata = _yaml_handler.load(yaml_text)
    except (yaml.YAMLError, ValueError) as e:
        raise FrontMatterError("front-matter-invalid", f"Invalid YAML: {e}") from e

    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(
            "front-matter-invalid",
            f"Front matter must be a mapping, got {type(metadata).__name__}",
        )
    return metadata


def parse_front_matter(text: str) -> Tuple[dict, str]:
    yaml_text, body = split_front_matter(text)
    return load_metadata(yaml_text), body


def load_post(text: str) -> frontmatter.Post:
    """Parse a post into a ``frontmatter.Post`` after checking its structure."""
    metadata, body = parse_front_matter(text)
    post = frontmatter.Post(body.strip())
    post.metadata.update(metadata)
    return post


def parse_post_date(value) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a date: {value!r}")

    raw = value.strip()
    try:
        return datetime.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in _JEKYLL_DATE_FORMATS:
        try:
            return datetime.datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {raw!r}")


def split_post_filename(name: str) -> Tuple[Optional[datetime.date], str]:
    """Split ``2016-01-02-my-post.md`` into its date and slug."""
    stem = name.rsplit(".", 1)[0] if "." in name else name
    match = _FILENAME_PATTERN.match(stem)
    if not match:
        return None, stem
    year, month, day, slug = match.groups()
    try:
        return datetime.date(int(year), int(month), int(day)), slug
    except ValueError:
        return None, stem
