"""Environment variable file loader.

Loads `.env` and `.env.local` from the working directory so the exporter can
be configured without exporting DECONZ_* variables by hand.
"""

from pathlib import Path

import structlog
from dotenv import load_dotenv

log = structlog.get_logger(__name__)


def load_env_files(project_root: Path | None = None) -> list[Path]:
    """Load .env files in priority order.

    Priority order (highest to lowest):
    1. Variables already present in the process environment
    2. `.env.local` (local overrides, gitignored)
    3. `.env` (base configuration)

    Args:
        project_root: Directory holding the .env files. Defaults to the working directory.

    Returns:
        The files that were loaded.
    """
    if project_root is None:
        project_root = Path.cwd()

    # Higher priority first: load_dotenv(override=False) never replaces a set variable
    env_files = [
        project_root / ".env.local",
        project_root / ".env",
    ]

    loaded_files = []
    for env_file in env_files:
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            loaded_files.append(env_file)

    if loaded_files:
        log.info(
            "env_files_loaded",
            files=[str(path.name) for path in loaded_files],
            project_root=str(project_root),
        )
    else:
        log.debug("no_env_files_found", project_root=str(project_root))

    return loaded_files
