"""
Document tree layout: typed folders of markdown files under ``docs/``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, TypeAlias, get_args

DocType: TypeAlias = Literal["feature-specs", "jtbd", "user-stories", "api"]

DOC_TYPES: tuple[DocType, ...] = get_args(DocType)
DOCS_DIR = "docs"
ENV_PROJECT_ROOT = "DOCS_PROJECT_ROOT"


@dataclass(frozen=True)
class DocFile:
    """A markdown document found in the tree."""

    doc_type: DocType
    slug: str
    path: str


def is_valid_doc_type(value: str) -> bool:
    return value in DOC_TYPES


def get_project_root(override_path: str | None = None) -> str:
    """
    Resolve the project root from an override, DOCS_PROJECT_ROOT, or the cwd.
    """
    raw_path = override_path or os.getenv(ENV_PROJECT_ROOT) or os.getcwd()
    resolved = os.path.abspath(os.path.expanduser(raw_path))
    if not os.path.isdir(resolved):
        raise ValueError(f"Project root does not exist: {resolved}")
    return resolved


def get_doc_type_dir(project_root: str, doc_type: DocType) -> str:
    directory = os.path.join(project_root, DOCS_DIR, doc_type)
    os.makedirs(directory, exist_ok=True)
    return directory


def get_doc_path(project_root: str, doc_type: DocType, slug: str) -> str:
    """
    Resolve the path of a document, appending ``.md`` and rejecting traversal.
    """
    if not is_valid_doc_type(doc_type):
        raise ValueError(f"Unknown doc type: {doc_type}")
    base = slug[:-3] if slug.lower().endswith(".md") else slug
    filename = f"{base or 'untitled'}.md"
    directory = get_doc_type_dir(project_root, doc_type)
    full_path = os.path.abspath(os.path.join(directory, filename))
    if os.path.dirname(full_path) != os.path.abspath(directory):
        raise ValueError("Invalid document path: path traversal not allowed")
    return full_path


def list_doc_files(project_root: str, doc_type: DocType | None = None) -> list[DocFile]:
    types = [doc_type] if doc_type else list(DOC_TYPES)
    results: list[DocFile] = []
    for current_type in types:
        directory = os.path.join(project_root, DOCS_DIR, current_type)
        if not os.path.isdir(directory):
            continue
        for name in sorted(os.listdir(directory)):
            full_path = os.path.join(directory, name)
            if os.path.isfile(full_path) and name.lower().endswith(".md"):
                results.append(DocFile(doc_type=current_type, slug=name, path=full_path))
    return results


def read_document(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def document_mtime(path: str) -> int:
    """Modification time in integer nanoseconds, exact across JSON round-trips."""
    return os.stat(path).st_mtime_ns
