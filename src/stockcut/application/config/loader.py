"""Loading of JSON job files.

A job is read, parsed and validated in three steps. Whichever step fails
raises ConfigError with an ``error_type`` naming that step, so the CLI and
the REST API can report the problem without inspecting messages.
Validation problems inside a piece or stock sheet are reported against the
entry's id as well as its position, since ids are what users write.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stockcut.application.config.schema import JobConfiguration

# Job sections holding lists of entries identified by "id"
ITEM_SECTIONS: dict[str, str] = {"pieces": "piece", "stock": "stock sheet"}


class ConfigError(Exception):
    """Raised when a job cannot be read, parsed or validated.

    Attributes:
        message: Human-readable summary, one line per problem.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: The job file, or None for jobs built in memory.
        details: One dict per problem. JSON errors carry line, column and
            message; validation errors carry path, message, value and
            error_type, plus item_id when the problem lies inside a piece or
            stock sheet that has an id.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic location as a JSON path such as ``pieces[0].width``.

    Errors on the document itself (e.g. duplicate ids) have an empty
    location and render as ``(root)``.
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path or "(root)"


def _item_id(loc: tuple[str | int, ...], data: Any) -> str | None:
    """Id of the piece or stock sheet an error location points into."""
    if len(loc) < 2 or loc[0] not in ITEM_SECTIONS or not isinstance(loc[1], int):
        return None
    if not isinstance(data, dict):
        return None

    entries = data.get(loc[0])
    if not isinstance(entries, list) or loc[1] >= len(entries):
        return None

    entry = entries[loc[1]]
    if isinstance(entry, dict) and isinstance(entry.get("id"), str) and entry["id"]:
        return entry["id"]
    return None


def error_location(detail: dict[str, Any]) -> str:
    """Display location of a validation detail.

    Example:
        ``pieces[0].width (piece 'side')``
    """
    location = detail["path"]
    item_id = detail.get("item_id")
    if item_id is not None:
        kind = ITEM_SECTIONS[location.split("[", 1)[0]]
        location = f"{location} ({kind} '{item_id}')"
    return location


def _validation_details(
    error: PydanticValidationError, data: Any
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        detail: dict[str, Any] = {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        item_id = _item_id(err["loc"], data)
        if item_id is not None:
            detail["item_id"] = item_id
        details.append(detail)
    return details


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Job validation failed:"]
    for detail in details:
        line = f"  - {error_location(detail)}: {detail['message']}"
        value = detail.get("value")
        # Whole entries echoed back as values only add noise
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got: {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _read_job_file(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Job file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading job file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Cannot read job file {path}: {e}",
            error_type="file_read_error",
            path=path,
        )


def _parse_job(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in job file {path} at line {e.lineno}, "
                f"column {e.colno}: {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate_job(data: Any, path: Path | None) -> JobConfiguration:
    try:
        return JobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e, data)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> JobConfiguration:
    """Load and validate an optimization job from a JSON file.

    Every schema problem in the file is reported at once, not only the
    first one.

    Args:
        path: Path to the JSON job file.

    Returns:
        The validated JobConfiguration.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or does
            not match the job schema.

    Example:
        ```python
        try:
            config = load_config(Path("kitchen.json"))
        except ConfigError as e:
            for detail in e.details:
                print(error_location(detail), detail["message"])
        ```
    """
    return _validate_job(_parse_job(_read_job_file(path), path), path)


def load_config_from_dict(data: dict[str, Any]) -> JobConfiguration:
    """Validate an optimization job given as an already parsed document.

    Used for jobs that arrive in API requests.

    Raises:
        ConfigError: If the document does not match the job schema.
    """
    return _validate_job(data, None)
