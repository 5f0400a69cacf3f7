"""Manifest file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from kubekit.infra.k8s.errors import ValidationError


def read_manifest(file_path: Path) -> Any:
    """Read a YAML manifest file.

    A file with a single document returns that document; a file with
    several ``---`` separated documents returns them as a list (empty
    documents are dropped).

    Raises:
        ValidationError: If the file cannot be read as UTF-8 text or is not
            valid YAML
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Error reading file: {file_path}", details=str(e)) from e

    try:
        documents = [doc for doc in yaml.safe_load_all(content) if doc is not None]
    except yaml.YAMLError as e:
        raise ValidationError(f"Error parsing YAML file: {file_path}", details=str(e)) from e

    logger.debug(f"Loaded {len(documents)} document(s) from {file_path}")
    if len(documents) == 1:
        return documents[0]
    return documents
