"""package.json dependency rewrite."""

import json
import logging
import os
from typing import Dict, List, Tuple

from ..errors import FileIOError
from ..mappings import MappingRegistry

logger = logging.getLogger(__name__)


def update_manifest(
    project_path: str,
    registry: MappingRegistry,
    target_dependencies: Dict[str, str],
) -> Tuple[bool, List[str]]:
    """Drop ag-Grid packages and add the ng-ui ones.

    ag-Grid packages are removed from ``dependencies`` and
    ``devDependencies``; target packages are added to ``dependencies``
    unless already declared somewhere.

    Returns:
        (modified, removed package names). ``(False, [])`` when the
        project has no package.json.

    Raises:
        FileIOError: If package.json cannot be read, parsed or written
    """
    manifest = os.path.join(project_path, "package.json")
    if not os.path.isfile(manifest):
        logger.warning(f"No package.json in {project_path}, dependencies not updated")
        return False, []

    try:
        with open(manifest, "r", encoding="utf-8") as f:
            package = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileIOError(manifest, f"Cannot read package.json: {e}") from e

    removed: List[str] = []
    for section in ("dependencies", "devDependencies"):
        deps = package.get(section)
        if not isinstance(deps, dict):
            continue
        for name in [n for n in deps if registry.is_source_package(n)]:
            del deps[name]
            removed.append(name)

    declared = set(package.get("dependencies") or {}) | set(package.get("devDependencies") or {})
    added = {name: version for name, version in target_dependencies.items() if name not in declared}
    if added:
        package.setdefault("dependencies", {}).update(added)

    if not removed and not added:
        return False, []

    try:
        with open(manifest, "w", encoding="utf-8") as f:
            json.dump(package, f, indent=2)
            f.write("\n")
    except OSError as e:
        raise FileIOError(manifest, f"Cannot write package.json: {e}") from e

    logger.info(f"Updated package.json: removed {removed}, added {sorted(added)}")
    return True, removed
