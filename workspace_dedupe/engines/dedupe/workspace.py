"""Workspace reader — load ``sfdx-project.json`` and validate it."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from workspace_dedupe.core.config import DEFAULT_SETTINGS, Settings
from workspace_dedupe.engines.dedupe.models import WorkspaceDescriptor
from workspace_dedupe.exceptions import InvalidDescriptorError, MissingDescriptorError


def descriptor_path(root: Path, settings: Settings | None = None) -> Path:
    settings = settings or DEFAULT_SETTINGS
    return (root / settings.descriptor_file).resolve()


def load_workspace(root: Path, settings: Settings | None = None) -> WorkspaceDescriptor:
    """Read and validate the workspace descriptor under *root*.

    Raises:
        MissingDescriptorError: the descriptor file does not exist.
        InvalidDescriptorError: the file is not JSON or misses required fields.
    """
    path = descriptor_path(root, settings)
    if not path.is_file():
        raise MissingDescriptorError(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidDescriptorError(path, f"not valid JSON ({e})") from e

    try:
        return WorkspaceDescriptor.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidDescriptorError(path, problems) from e
