import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import make_manifest_error

logger = logging.getLogger(__name__)

MANIFEST_NAME = "katrin.toml"
DEFAULT_EXTENSION = ".kat"


@dataclass
class ScriptsConfig:
    """Where scripts live inside the project."""

    paths: list[str] = field(default_factory=lambda: ["scripts/"])
    extension: str = DEFAULT_EXTENSION


@dataclass
class ProjectManifest:
    name: str
    project_root: Path
    entry: str | None = None
    scripts: ScriptsConfig = field(default_factory=ScriptsConfig)

    @property
    def entry_path(self) -> Path | None:
        if self.entry is None:
            return None
        return self.project_root / self.entry


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise make_manifest_error(f"cannot read manifest: {e}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise make_manifest_error(f"invalid TOML: {e}", path) from e

    project = data.get("project", {})
    if not isinstance(project, dict):
        raise make_manifest_error("[project] must be a table", path)
    scripts_data = data.get("scripts", {})
    if not isinstance(scripts_data, dict):
        raise make_manifest_error("[scripts] must be a table", path)

    name = project.get("name", path.parent.name)
    if not isinstance(name, str):
        raise make_manifest_error("[project] name must be a string", path)
    entry = project.get("entry")
    if entry is not None and not isinstance(entry, str):
        raise make_manifest_error("[project] entry must be a string", path)

    paths = scripts_data.get("paths", ["scripts/"])
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        raise make_manifest_error("[scripts] paths must be a list of strings", path)

    extension = scripts_data.get("extension", DEFAULT_EXTENSION)
    if not isinstance(extension, str):
        raise make_manifest_error("[scripts] extension must be a string", path)
    if not extension.startswith("."):
        extension = f".{extension}"

    manifest = ProjectManifest(
        name=name,
        project_root=path.parent,
        entry=entry,
        scripts=ScriptsConfig(paths=paths, extension=extension),
    )
    logger.debug("Loaded manifest %s (%d script paths)", path, len(paths))
    return manifest


def discover_scripts(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.scripts.paths:
        base = (root / rel).resolve()
        if not base.exists():
            logger.debug("Script path %s does not exist, skipping", base)
            continue
        for p in base.rglob(f"*{manifest.scripts.extension}"):
            files.append(p)
    return sorted(set(files))
