"""Collection and validation of the answers that describe a new library.

Answers come from command-line flags first.  Anything missing or invalid is
asked for interactively with Rich prompts, offering defaults derived from the
environment: the git identity, the author's GitHub profile (looked up by
email through the GitHub search API), and the destination folder name.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator
from rich.prompt import Prompt
from rich.table import Table

from .config import Config
from .scaffolder.errors import AnswersError
from .scaffolder.variants import VARIANT_TITLES, Variant
from .utils import console, run_command

_SCOPED_NAME = re.compile(r"^@([^/]+)/([^/]+)$")
_URL_SAFE = re.compile(r"^[a-z0-9\-._~]+$")
_EMAIL = re.compile(r"^\S+@\S+$")
_URL = re.compile(r"^https?://")
_GITHUB_PROFILE = re.compile(r"^https?://github\.com/[^/]+")

_RESERVED_NAMES = frozenset({"node_modules", "favicon.ico"})

# ---------------------------------------------------------------------------
# Validators -- each returns an error message, or ``None`` when valid
# ---------------------------------------------------------------------------


def validate_slug(value: str) -> str | None:
    """Check that *value* is a valid name for a new npm package."""
    message = "Must be a valid npm package name"
    if not value or value != value.strip() or len(value) > 214:
        return message
    if value.lower() != value or value in _RESERVED_NAMES:
        return message

    match = _SCOPED_NAME.match(value)
    parts = match.groups() if match else (value,)
    for part in parts:
        if part.startswith((".", "_")) or not _URL_SAFE.match(part):
            return message
    return None


def validate_required(value: str) -> str | None:
    return None if value and value.strip() else "Cannot be empty"


def validate_email(value: str) -> str | None:
    return None if _EMAIL.match(value or "") else "Must be a valid email address"


def validate_url(value: str) -> str | None:
    return None if _URL.match(value or "") else "Must be a valid URL"


def validate_variant(value: str) -> str | None:
    try:
        Variant(value)
    except ValueError:
        return f"Must be one of: {', '.join(v.value for v in Variant)}"
    return None


VALIDATORS: dict[str, Callable[[str], str | None]] = {
    "slug": validate_slug,
    "description": validate_required,
    "author_name": validate_required,
    "author_email": validate_email,
    "author_url": validate_url,
    "repo_url": validate_url,
    "variant": validate_variant,
}

QUESTIONS: dict[str, str] = {
    "slug": "What is the name of the npm package?",
    "description": "What is the description for the package?",
    "author_name": "What is the name of package author?",
    "author_email": "What is the email address for the package author?",
    "author_url": "What is the URL for the package author?",
    "repo_url": "What is the URL for the repository?",
    "variant": "What type of package do you want to develop?",
}


# ---------------------------------------------------------------------------
# Answers model
# ---------------------------------------------------------------------------


class Answers(BaseModel):
    """Validated answers describing the library to generate."""

    slug: str
    description: str
    author_name: str
    author_email: str
    author_url: str
    repo_url: str
    variant: Variant

    @field_validator("slug", "description", "author_name", "author_email", "author_url", "repo_url")
    @classmethod
    def check_answer(cls, value: str, info: ValidationInfo) -> str:
        error = VALIDATORS[info.field_name](value)
        if error:
            raise ValueError(error)
        return value

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Answers":
        """Validate *values*, converting pydantic errors to :class:`AnswersError`."""
        try:
            return cls.model_validate(dict(values))
        except ValidationError as exc:
            problems = {
                ".".join(str(loc) for loc in error["loc"]): error["msg"]
                for error in exc.errors()
            }
            raise AnswersError(problems) from exc


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


async def git_identity() -> tuple[str | None, str | None]:
    """Return ``(user.name, user.email)`` from the git configuration, if set."""
    values: list[str | None] = []
    for key in ("user.name", "user.email"):
        try:
            returncode, stdout, _ = await run_command(["git", "config", "--get", key])
        except OSError:
            returncode, stdout = 1, ""
        values.append(stdout if returncode == 0 and stdout else None)
    return values[0], values[1]


async def lookup_github_username(email: str, config: Config | None = None) -> str | None:
    """Find the GitHub login whose public email is *email*.

    Returns ``None`` on any network error, non-200 response or empty result.
    """
    config = config or Config()
    url = f"{config.github_api_url}/search/users"
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(config.github_timeout)) as client:
            response = await client.get(url, params={"q": f"{email} in:email"})
            if response.status_code != 200:
                return None
            items = response.json().get("items") or []
            login = items[0].get("login") if items else None
    except (httpx.HTTPError, ValueError, AttributeError, LookupError):
        return None

    return login or None


def default_slug(folder_name: str) -> str | None:
    """Suggest a package name for a destination folder.

    Valid names that are scoped or start with ``react-native`` are kept;
    other valid names get a ``react-native-`` prefix.
    """
    if validate_slug(folder_name) is not None:
        return None
    if re.match(r"^(@|react-native)", folder_name):
        return folder_name
    return f"react-native-{folder_name}"


def default_repo_url(author_url: str, slug: str) -> str:
    """Suggest ``<github profile>/<slug>`` when the author URL is a GitHub profile."""
    if _GITHUB_PROFILE.match(author_url or ""):
        return f"{author_url}/{slug.removeprefix('@').replace('/', '-')}"
    return ""


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


async def collect_answers(
    provided: Mapping[str, Any],
    folder_name: str,
    *,
    config: Config | None = None,
    interactive: bool = True,
) -> Answers:
    """Merge command-line answers with interactive prompts.

    Args:
        provided: Answers given up front (``None`` values are ignored).
        folder_name: Base name of the destination folder, used for the
            default package name.
        config: Configuration for the GitHub lookup.
        interactive: When ``False`` nothing is asked; missing or invalid
            answers raise :class:`AnswersError` instead.

    Raises:
        AnswersError: In non-interactive mode, for each missing or invalid answer.
    """
    answers: dict[str, str] = {}
    problems: dict[str, str] = {}
    git_name: str | None = None
    git_email: str | None = None
    if interactive:
        git_name, git_email = await git_identity()

    for field in QUESTIONS:
        value = provided.get(field)
        if isinstance(value, Variant):
            value = value.value
        error = VALIDATORS[field](value) if value is not None else "required"
        if error is None:
            answers[field] = str(value)
            continue

        if not interactive:
            problems[field] = error
            continue

        default = await _default_for(field, answers, folder_name, git_name, git_email, config)
        answers[field] = _ask(field, default)

    if problems:
        raise AnswersError(problems)

    return Answers.from_mapping(answers)


async def _default_for(
    field: str,
    answers: Mapping[str, str],
    folder_name: str,
    git_name: str | None,
    git_email: str | None,
    config: Config | None,
) -> str | None:
    if field == "slug":
        return default_slug(folder_name)
    if field == "author_name":
        return git_name
    if field == "author_email":
        return git_email
    if field == "author_url":
        username = await lookup_github_username(answers["author_email"], config)
        return f"https://github.com/{username}" if username else None
    if field == "repo_url":
        return default_repo_url(answers["author_url"], answers["slug"]) or None
    return None


def _ask(field: str, default: str | None) -> str:
    """Prompt until the answer for *field* passes validation."""
    if field == "variant":
        _print_variant_choices()
        return Prompt.ask(
            QUESTIONS[field],
            console=console,
            choices=[v.value for v in Variant],
            default=default or Variant.NATIVE_OBJC_MODULE.value,
        )

    while True:
        if default is None:
            value = Prompt.ask(QUESTIONS[field], console=console)
        else:
            value = Prompt.ask(QUESTIONS[field], console=console, default=default)
        error = VALIDATORS[field](value)
        if error is None:
            return value
        console.print(f"[red]{error}[/red]")


def _print_variant_choices() -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Description")
    for variant, title in VARIANT_TITLES.items():
        table.add_row(variant.value, title)
    console.print(table)
