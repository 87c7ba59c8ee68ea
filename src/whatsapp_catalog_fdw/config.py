"""
Connection settings for the WhatsApp catalog foreign data wrapper.

Inside a query-engine host the options arrive through the host's server
options. Standalone callers (the CLI, scripts) resolve them with
:func:`load_server_options`, which merges, from highest to lowest precedence:

1. Explicit keyword arguments.
2. ``WACAT_PHONE_NUMBER``, ``WACAT_FROM_NUMBER`` and ``WACAT_API_KEY``.
3. The ``[whatsapp_catalog]`` table of a TOML secrets file, located through
   ``WACAT_SECRETS_PATH`` or ``.secrets/secret.toml`` / ``.secrets/secrets.toml``
   under the working directory.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

DEFAULT_ENDPOINT_BASE = "https://api.p.2chat.io/open/whatsapp/catalog/products"
USER_AGENT = "WhatsApp Catalog FDW"
API_KEY_HEADER = "X-User-API-Key"

REQUIRED_OPTIONS = ("phone_number", "from_number", "api_key")
SECRETS_SECTION = "whatsapp_catalog"
_ENV_PREFIX = "WACAT_"
_ENV_SECRETS_PATH = "WACAT_SECRETS_PATH"


@dataclass(frozen=True, slots=True)
class CatalogSettings:
    """Validated connection settings, fixed for the lifetime of an adapter instance."""

    phone_number: str
    from_number: str
    api_key: str = field(repr=False)
    endpoint_base: str = DEFAULT_ENDPOINT_BASE

    def request_url(self) -> str:
        return f"{self.endpoint_base}/{self.phone_number}?from_number={self.from_number}"

    def request_headers(self) -> Dict[str, str]:
        return {"user-agent": USER_AGENT, API_KEY_HEADER: self.api_key}


def _candidate_paths() -> Iterable[Path]:
    env_override = os.getenv(_ENV_SECRETS_PATH)
    if env_override:
        yield Path(env_override).expanduser()
    secrets_dir = Path.cwd() / ".secrets"
    for filename in ("secret.toml", "secrets.toml"):
        yield secrets_dir / filename


def _load_secrets_section(path: Optional[Path]) -> Dict[str, str]:
    candidates = [path] if path else list(_candidate_paths())
    for candidate in candidates:
        if not candidate.is_file():
            continue
        with candidate.open("rb") as handle:
            data = tomllib.load(handle)
        section = data.get(SECRETS_SECTION, {})
        if not isinstance(section, dict):
            return {}
        return {key: str(value) for key, value in section.items() if isinstance(value, (str, int)) and not isinstance(value, bool)}
    return {}


def load_server_options(
    *,
    secrets_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
) -> Dict[str, str]:
    """
    Resolve server options for a standalone scan.

    Parameters
    ----------
    secrets_path:
        Explicit TOML file. When given, the default search locations are skipped.
    overrides:
        Values taking precedence over the environment and the secrets file.
        ``None`` and empty strings are ignored.

    Missing keys are left out; validation happens when the adapter initializes.
    """

    options: Dict[str, str] = dict(_load_secrets_section(secrets_path))
    for key in REQUIRED_OPTIONS:
        env_value = os.getenv(f"{_ENV_PREFIX}{key.upper()}")
        if env_value:
            options[key] = env_value
    for key, value in (overrides or {}).items():
        if value:
            options[key] = value
    return options
