from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_env_files() -> tuple[Path, ...]:
    """Return dotenv candidates for pydantic-settings (missing files are ignored).

    Precedence (later overrides earlier):
    1) repo-root `.env`, `.env.local` (where this package lives during dev)
    2) CWD `.env`, `.env.local` (user overrides)
    """

    def _repo_root() -> Path:
        here = Path(__file__).resolve()
        # Typical dev layout: <repo>/src/elca_fill/config.py
        for cand in [here.parent] + list(here.parents):
            if (cand / "pyproject.toml").exists() and (cand / "src").exists():
                return cand
        try:
            return here.parents[2]
        except IndexError:
            return here.parent

    repo_root = _repo_root()
    cwd = Path.cwd()
    return (
        repo_root / ".env",
        repo_root / ".env.local",
        cwd / ".env",
        cwd / ".env.local",
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ELCA_",
        extra="ignore",
        env_file=_default_env_files(),
        env_file_encoding="utf-8",
    )

    username: str | None = None
    password: str | None = None
    # Pre-acquired session id; skips the login round-trip when set.
    sid: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ELCA_SID", "SID"),
    )

    base_url: str = "https://www.bauteileditor.de"
    timeout_sec: float = 30.0

    templates_dir: Path = Path("templates")

    # "constant": every template is treated as `template_version`.
    # "marker": read `V<version>` from `version_column` of the last filled row.
    version_strategy: str = "constant"
    template_version: str = "4.1"
    version_column: int = 1

    # When false, a repeated indicator/category in the report overwrites the earlier row.
    strict_duplicates: bool = True

    # Write "Edited on <timestamp>" into A1 of the filled workbook.
    stamp: bool = True


settings = Settings()
