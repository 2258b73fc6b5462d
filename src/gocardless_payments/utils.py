import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
from urllib.parse import quote

from .errors import InvalidRequestError

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

__all__ = ["load_dotenv", "format_path", "path_placeholders", "flatten_query_params"]


def load_dotenv(dotenv_path: Optional[str] = None) -> Optional[Path]:
    """Load environment variables from a ``.env`` file.

    Parses simple ``KEY=VALUE`` lines, ignoring comments and blank lines.
    Values already present in the environment are not overwritten.

    If no path is given, searches for a ``.env`` file in the current
    directory and each parent directory, stopping at the first one found.

    Args:
        dotenv_path: Explicit path to a ``.env`` file. If ``None``, searches
            the current directory and its parents.

    Returns:
        The path of the file that was loaded, or ``None`` if none was found.
    """
    if dotenv_path:
        search_paths = [Path(dotenv_path)]
    else:
        current = Path.cwd().resolve()
        search_paths = [current / ".env"] + [p / ".env" for p in current.parents]

    for path in search_paths:
        if not path.is_file():
            continue
        try:
            with open(path, "r") as f:
                lines = f.readlines()
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            continue

        for line in lines:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key.startswith("export "):
                key = key[len("export ") :].strip()
            value = value.strip().strip("'\"")
            if key and key not in os.environ:
                os.environ[key] = value
        logger.debug("Loaded environment from %s", path)
        return path
    return None


def path_placeholders(template: str) -> Tuple[str, ...]:
    """Return the ``:name`` placeholders of a path template, in order."""
    return tuple(PLACEHOLDER_RE.findall(template))


def format_path(template: str, path_params: Mapping[str, str]) -> str:
    """Substitute ``:name`` placeholders with percent-encoded values.

    Raises:
        InvalidRequestError: if a placeholder has no value in ``path_params``,
            or its value is ``None`` or empty.
    """
    missing = [
        name
        for name in path_placeholders(template)
        if path_params.get(name) is None or str(path_params[name]) == ""
    ]
    if missing:
        raise InvalidRequestError(
            f"Unbound path parameter(s) {', '.join(missing)} for '{template}'"
        )

    def replace(match: "re.Match[str]") -> str:
        return quote(str(path_params[match.group(1)]), safe="")

    return PLACEHOLDER_RE.sub(replace, template).lstrip("/")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def _flatten(prefix: str, value: Any) -> Iterator[Tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, sub in value.items():
            yield from _flatten(f"{prefix}[{key}]", sub)
    else:
        yield prefix, _query_value(value)


def flatten_query_params(params: Mapping[str, Any]) -> Dict[str, str]:
    """Flatten query parameters into the form the API expects.

    ``None`` values are dropped, nested mappings become ``key[sub]`` (e.g.
    ``created_at[gte]``), booleans become ``true``/``false`` and sequences
    are comma-joined.
    """
    flat: Dict[str, str] = {}
    for key, value in params.items():
        for name, encoded in _flatten(key, value):
            flat[name] = encoded
    return flat
