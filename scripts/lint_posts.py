import argparse
import logging
import sys
from pathlib import Path

from app.schemas.lint import LintReport
from app.services.post_validator import PostValidator
from app.settings import settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate blog post front matter.")
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Post files or directories (default: POSTS_DIR)",
    )
    parser.add_argument(
        "--strict", action="store_true", help="Treat warnings as failures"
    )
    parser.add_argument("--format", choices=("text", "json"), default="text")
    return parser


def exit_code(report: LintReport, strict: bool = False) -> int:
    if report.errors or (strict and report.warnings):
        return 1
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    paths = args.paths or [settings.posts_path]

    validator = PostValidator(site_root=settings.SITE_ROOT or None)
    report = validator.validate_paths(paths)

    if args.format == "json":
        print(report.model_dump_json(indent=2))
    else:
        for issue in report.issues:
            print(issue)
        print(
            f"{report.checked} files checked, {report.errors} errors, {report.warnings} warnings"
        )
    return exit_code(report, strict=args.strict)


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(main())
