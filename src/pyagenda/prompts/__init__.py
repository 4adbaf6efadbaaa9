"""Prompt files.

The system directive is plain text shipped with the package. A file of the
same name under ./prompts/ in the working directory takes precedence, so
the assistant's behavior can be changed without editing the package.
"""

from functools import lru_cache
from pathlib import Path

PACKAGE_PROMPTS = Path(__file__).parent
SYSTEM_PROMPT_NAME = "system"


def prompt_search_path() -> tuple[Path, ...]:
    """Directories searched for prompt files, highest precedence first."""
    return (Path.cwd() / "prompts", PACKAGE_PROMPTS)


@lru_cache(maxsize=8)
def load_prompt(name: str) -> str:
    """Read the prompt called `name` (file `{name}.txt`).

    Raises:
        FileNotFoundError: If no directory on the search path has the file
    """
    candidates = [directory / f"{name}.txt" for directory in prompt_search_path()]
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding="utf-8")
    searched = ", ".join(str(path) for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found (searched: {searched})")


def get_system_directive() -> str:
    """Directive that seeds every conversation."""
    return load_prompt(SYSTEM_PROMPT_NAME)


def clear_cache() -> None:
    """Forget loaded prompts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "clear_cache",
    "get_system_directive",
    "load_prompt",
    "prompt_search_path",
]
