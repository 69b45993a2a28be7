"""ponzu-scaffold configuration.

Centralised, typed configuration for the bootstrap and build pipeline. All
settings use Pydantic v2 models so they can be validated at construction time
and serialised to/from JSON or environment variables without boiler-plate.

The workspace root (``GOPATH``) is threaded explicitly through ``Config``;
no other module reads it from the environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ponzu_scaffold.errors import ConfigError

# Top-level subtrees of the template repository that belong to the framework
# and get relocated into the vendor tree.
VENDOR_MANIFEST: tuple[str, ...] = ("content", "management", "system")

# Files inside the vendored ``content`` package that user files must never
# overwrite.
PROTECTED_FILES: frozenset[str] = frozenset({"item.go", "types.go"})

DEV_BRANCH = "ponzu-dev"


class RepoIdentity(BaseModel):
    """Identity of the template repository (``host/owner/name``)."""

    host: str = Field(default="github.com")
    owner: str = Field(default="bosssauce")
    name: str = Field(default="ponzu")

    @property
    def parts(self) -> tuple[str, str, str]:
        return (self.host, self.owner, self.name)

    @property
    def import_path(self) -> str:
        """Slash-separated identity, e.g. ``github.com/bosssauce/ponzu``."""
        return "/".join(self.parts)

    @property
    def remote_url(self) -> str:
        return f"https://{self.import_path}.git"

    def local_path(self, src_root: Path) -> Path:
        """Location of the repository inside a workspace ``src`` directory."""
        return src_root.joinpath(*self.parts)


class ToolchainConfig(BaseModel):
    """External programs and the build artefact they produce."""

    git_binary: str = Field(default="git")
    go_binary: str = Field(default="go")
    output_name: str = Field(default="ponzu-server", min_length=1)
    entry_points: list[str] = Field(
        default=["main.go", "options.go"],
        min_length=1,
        description="Go source files (relative to cmd_subdir) passed to `go build`",
    )


class BuildOptions(BaseModel):
    """Options recognised by ``bootstrap``.

    ``fork`` is a workspace-relative repository path and only takes effect
    when ``dev`` is true.
    """

    dev: bool = Field(default=False, description="Clone the development branch")
    fork: str = Field(default="", description="Alternate local source for dev clones")

    @field_validator("fork")
    @classmethod
    def _strip_fork(cls, value: str) -> str:
        return value.strip()


class Config(BaseModel):
    """Global ponzu-scaffold configuration.

    Instances are typically created once by the CLI (``Config.from_env()``)
    and then passed through the rest of the system.
    """

    workspace_root: Path
    repo: RepoIdentity = Field(default_factory=RepoIdentity)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    dev_branch: str = Field(default=DEV_BRANCH, min_length=1)
    cmd_subdir: str = Field(default="cmd/ponzu")
    content_dir: str = Field(default="content")
    vendor_manifest: list[str] = Field(default_factory=lambda: list(VENDOR_MANIFEST))
    protected_files: list[str] = Field(default_factory=lambda: sorted(PROTECTED_FILES))

    @field_validator("workspace_root", mode="before")
    @classmethod
    def _require_workspace_root(cls, value: Any) -> Any:
        if value is None or not str(value).strip():
            raise ValueError("workspace_root must be a non-empty path")
        return value

    @field_validator("vendor_manifest")
    @classmethod
    def _unique_manifest(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("vendor_manifest entries must be unique")
        return value

    @model_validator(mode="after")
    def _content_dir_is_vendored(self) -> "Config":
        # The user content directory replaces one of the relocated subtrees.
        if self.content_dir not in self.vendor_manifest:
            raise ValueError(
                f"content_dir '{self.content_dir}' must be one of vendor_manifest"
            )
        return self

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def src_root(self) -> Path:
        """``<workspace_root>/src``, the root every project path joins onto."""
        return self.workspace_root / "src"

    @property
    def canonical_local_source(self) -> Path:
        """The template repository checked out inside the workspace."""
        return self.repo.local_path(self.src_root)

    def cmd_path(self, project: Path) -> Path:
        return project.joinpath(*self.cmd_subdir.split("/"))

    def vendor_path(self, project: Path) -> Path:
        """``<project>/cmd/ponzu/vendor/<host>/<owner>/<name>``."""
        return self.cmd_path(project).joinpath("vendor", *self.repo.parts)

    def user_content_path(self, project: Path) -> Path:
        return project / self.content_dir

    def vendored_content_path(self, project: Path) -> Path:
        return self.vendor_path(project) / self.content_dir

    def entry_point_paths(self, project: Path) -> list[Path]:
        return [self.cmd_path(project) / name for name in self.toolchain.entry_points]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables:
            GOPATH (required), PONZU_GIT, PONZU_GO, PONZU_OUTPUT_NAME,
            PONZU_DEV_BRANCH.

        Blank optional variables fall back to their defaults.

        Raises:
            ConfigError: If ``GOPATH`` is unset or empty, or a variable holds
                a value the models reject.
        """
        gopath = os.environ.get("GOPATH", "").strip()
        if not gopath:
            raise ConfigError(
                "GOPATH is not set. Ponzu projects are created inside $GOPATH/src."
            )

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("PONZU_GIT"):
            toolchain_kwargs["git_binary"] = os.environ["PONZU_GIT"]
        if os.environ.get("PONZU_GO"):
            toolchain_kwargs["go_binary"] = os.environ["PONZU_GO"]
        if os.environ.get("PONZU_OUTPUT_NAME"):
            toolchain_kwargs["output_name"] = os.environ["PONZU_OUTPUT_NAME"]

        try:
            return cls(
                workspace_root=Path(gopath),
                toolchain=ToolchainConfig(**toolchain_kwargs),
                dev_branch=os.environ.get("PONZU_DEV_BRANCH", "").strip() or DEV_BRANCH,
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid environment configuration.\n{exc}") from exc
