"""Package layout — where each artifact of a package lands on disk."""

from __future__ import annotations

from dataclasses import dataclass

from metadelta.compare.manifest import render_package_xml
from metadelta.core.errors import SnapshotError
from metadelta.core.models import Artifact, PackageManifest
from metadelta.rules.table import RuleTable

DEFAULT_PACKAGE_ROOT = "force-app/main/default"


@dataclass(frozen=True)
class PackageFile:
    """A file a packaging step should write, relative to the package directory."""

    path: str
    content: str


def artifact_path(item: Artifact, rules: RuleTable, root: str = DEFAULT_PACKAGE_ROOT) -> str:
    """Relative package path for an artifact.

    Raises SnapshotError when the name would place the file outside the
    package directory (absolute path or ``..`` segment).
    """
    rule = rules.resolve(item.artifact_type)
    path = f"{root}/{rule.container_path}/{rule.file_name(item.name)}"
    parts = path.replace("\\", "/").split("/")
    if path.startswith(("/", "\\")) or ".." in parts:
        raise SnapshotError(f"Artifact {item.key} maps outside the package directory: {path}")
    return path


def plan_package(
    items: list[Artifact],
    rules: RuleTable,
    manifest: PackageManifest,
    root: str = DEFAULT_PACKAGE_ROOT,
) -> list[PackageFile]:
    """List the files for a package: ``package.xml`` then one file per artifact.

    Artifacts without left (source) content have nothing to deploy and are
    skipped. The first artifact mapped to a path wins. A path that is the
    folder of another planned file (a bundle root) is not planned as a file.
    Raises SnapshotError for a name that escapes the package directory.
    """
    files: dict[str, str] = {}
    for item in items:
        if item.left_content is None:
            continue
        files.setdefault(artifact_path(item, rules, root), item.left_content)

    folders = set()
    for path in files:
        parts = path.split("/")
        folders.update("/".join(parts[:i]) for i in range(1, len(parts)))
    planned = [PackageFile("package.xml", render_package_xml(manifest))]
    planned.extend(PackageFile(path, files[path]) for path in sorted(files) if path not in folders)
    return planned
