import logging
import re
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[\s*(.*?)\s*\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")
HTML_IMAGE_PATTERN = re.compile(r"<img\b[^>]*?\bsrc=[\"']([^\"']+)[\"']", re.IGNORECASE)
FENCE_PATTERN = re.compile(r"^(```|~~~).*?^\1", re.MULTILINE | re.DOTALL)


def find_image_references(content: str) -> List[str]:
    """
    List image sources referenced by a post body, in order of appearance.
    Fenced code blocks are ignored since their snippets are not rendered as images.
    """
    prose = FENCE_PATTERN.sub("", content)
    found = []
    for match in MARKDOWN_IMAGE_PATTERN.finditer(prose):
        found.append((match.start(), match.group(2)))
    for match in HTML_IMAGE_PATTERN.finditer(prose):
        found.append((match.start(), match.group(1)))
    return [src for _, src in sorted(found)]


def is_local_reference(src: str) -> bool:
    return src.startswith("/") and not src.startswith("//")


def missing_local_images(content: str, site_root: Path) -> List[str]:
    """Return root-relative image references that do not exist under site_root."""
    missing = []
    for src in find_image_references(content):
        if not is_local_reference(src):
            continue
        relative = src.split("?", 1)[0].split("#", 1)[0].lstrip("/")
        if not (Path(site_root) / relative).is_file():
            logger.debug(f"Image {src} not found under {site_root}")
            missing.append(src)
    return missing


def process_image_references(content: str, base_url: str) -> str:
    """
    Process markdown content so root-relative image references point at the site URL
    """
    base_url = base_url.rstrip("/")

    def _rewrite(match: re.Match, group: int) -> str:
        src = match.group(group)
        if not is_local_reference(src):
            return match.group(0)
        start = match.start(group) - match.start(0)
        end = match.end(group) - match.start(0)
        whole = match.group(0)
        return f"{whole[:start]}{base_url}{src}{whole[end:]}"

    def _rewrite_prose(prose: str) -> str:
        prose = MARKDOWN_IMAGE_PATTERN.sub(lambda m: _rewrite(m, 2), prose)
        return HTML_IMAGE_PATTERN.sub(lambda m: _rewrite(m, 1), prose)

    # fenced code is left untouched
    parts = []
    last = 0
    for fence in FENCE_PATTERN.finditer(content):
        parts.append(_rewrite_prose(content[last : fence.start()]))
        parts.append(fence.group(0))
        last = fence.end()
    parts.append(_rewrite_prose(content[last:]))
    return "".join(parts)
