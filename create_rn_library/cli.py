"""Command line entry point: ``create-rn-library <name>``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .answers import collect_answers
from .config import Config
from .scaffolder import LibraryScaffolder, ScaffoldError, Variant
from .scaffolder.errors import DestinationExistsError
from .utils import print_error, print_summary_table

# flag name -> answers key
_ANSWER_FLAGS: dict[str, str] = {
    "slug": "slug",
    "description": "description",
    "author_name": "author_name",
    "author_email": "author_email",
    "author_url": "author_url",
    "repo_url": "repo_url",
    "type": "variant",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-rn-library",
        description="Create a React Native library from the bundled templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-rn-library awesome-thing\n"
            "  create-rn-library awesome-thing --type js-library --no-git\n"
        ),
    )
    parser.add_argument("name", help="Folder to create the library in")
    parser.add_argument("--slug", help="Name of the npm package")
    parser.add_argument("--description", help="Description of the npm package")
    parser.add_argument("--author-name", help="Name of the package author")
    parser.add_argument("--author-email", help="Email address of the package author")
    parser.add_argument("--author-url", help="URL for the package author")
    parser.add_argument("--repo-url", help="URL for the repository")
    parser.add_argument(
        "--type",
        choices=[v.value for v in Variant],
        help="Type of package to develop",
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Fail instead of prompting for missing answers",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Skip creating a git repository with an initial commit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def _run(args: argparse.Namespace, config: Config) -> Path:
    folder = Path.cwd() / args.name
    scaffolder = LibraryScaffolder(config)

    # Checked again by the scaffolder; failing here avoids asking questions first.
    if folder.exists():
        raise DestinationExistsError(folder)

    provided = {key: getattr(args, flag) for flag, key in _ANSWER_FLAGS.items()}
    answers = await collect_answers(
        provided,
        Path(args.name).name,
        config=config,
        interactive=not args.no_interactive,
    )
    print_summary_table(
        {
            "Package": answers.slug,
            "Author": f"{answers.author_name} <{answers.author_email}>",
            "Repository": answers.repo_url,
            "Type": answers.variant.value,
        },
        title="New library",
    )
    return await scaffolder.create(folder, answers, init_git=not args.no_git)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        asyncio.run(_run(args, config))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1
    except (OSError, ValueError) as exc:
        print_error(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
