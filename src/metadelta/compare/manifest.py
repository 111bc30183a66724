"""Package manifest — deterministic type -> members descriptor and package.xml."""

from __future__ import annotations

from xml.sax.saxutils import escape

from metadelta.core.models import Artifact, PackageManifest

DEFAULT_API_VERSION = "58.0"
PACKAGE_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"


def build_manifest(items: list[Artifact], version: str = DEFAULT_API_VERSION) -> PackageManifest:
    """Group artifacts by type into a manifest.

    Types and members are sorted, so any permutation of the same items yields
    an identical manifest. Repeated names within a type collapse to one member.
    """
    grouped: dict[str, set[str]] = {}
    for item in items:
        grouped.setdefault(item.artifact_type, set()).add(item.name)

    return PackageManifest(
        types={t: sorted(grouped[t]) for t in sorted(grouped)},
        version=version,
    )


def render_package_xml(manifest: PackageManifest) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<Package xmlns="{PACKAGE_NAMESPACE}">',
    ]
    for artifact_type, members in manifest.types.items():
        lines.append("  <types>")
        for name in members:
            lines.append(f"    <members>{escape(name)}</members>")
        lines.append(f"    <name>{escape(artifact_type)}</name>")
        lines.append("  </types>")
    lines.append(f"  <version>{escape(manifest.version)}</version>")
    lines.append("</Package>")
    return "\n".join(lines) + "\n"
