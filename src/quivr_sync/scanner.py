"""Local vault scanning."""

from __future__ import annotations

import logging
from pathlib import Path

from quivr_sync.exceptions import ScanError
from quivr_sync.models import LocalDocument

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def scan_documents(root: Path | str) -> list[LocalDocument]:
    """Collect the markdown documents below ``root``.

    Hidden files and anything inside hidden directories (``.obsidian``,
    ``.trash``) are skipped. The result is sorted by relative path.

    Raises:
        ScanError: If root is missing or not a directory
    """
    root = Path(root)
    if not root.exists():
        raise ScanError(f"Vault not found: {root}")
    if not root.is_dir():
        raise ScanError(f"Vault is not a directory: {root}")

    documents: list[LocalDocument] = []
    for path in root.rglob(f"*{MARKDOWN_SUFFIX}"):
        relative = path.relative_to(root)
        if _is_hidden(relative) or not path.is_file():
            continue
        documents.append(LocalDocument(path=path, relative_path=relative.as_posix()))

    documents.sort(key=lambda doc: doc.relative_path)
    logger.info(f"Found {len(documents)} markdown document(s) in {root}")
    return documents
