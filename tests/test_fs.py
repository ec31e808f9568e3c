from pathlib import Path

import pytest

from doc_manager.fs import (
    DOC_TYPES,
    get_doc_path,
    get_project_root,
    is_valid_doc_type,
    list_doc_files,
)


def test_doc_types() -> None:
    assert DOC_TYPES == ("feature-specs", "jtbd", "user-stories", "api")
    assert is_valid_doc_type("api")
    assert not is_valid_doc_type("notes")


def test_list_doc_files_orders_by_type_then_slug(project_root: Path, make_doc) -> None:
    make_doc(project_root, "api", "accounts.md", "Accounts")
    (project_root / "docs" / "api" / "notes.txt").write_text("ignored")

    files = list_doc_files(str(project_root))

    assert [(f.doc_type, f.slug) for f in files] == [
        ("feature-specs", "checkout.md"),
        ("jtbd", "empty.md"),
        ("api", "accounts.md"),
        ("api", "orders.md"),
    ]
    assert files[0].path == str(project_root / "docs" / "feature-specs" / "checkout.md")


def test_list_doc_files_single_type(project_root: Path) -> None:
    files = list_doc_files(str(project_root), "api")

    assert [f.slug for f in files] == ["orders.md"]


def test_get_doc_path_appends_extension(tmp_path: Path) -> None:
    path = get_doc_path(str(tmp_path), "jtbd", "onboarding")

    assert path == str(tmp_path / "docs" / "jtbd" / "onboarding.md")
    assert get_doc_path(str(tmp_path), "jtbd", "onboarding.md") == path


def test_get_doc_path_rejects_traversal(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="traversal"):
        get_doc_path(str(tmp_path), "api", "../../secrets")


def test_get_project_root(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("DOCS_PROJECT_ROOT", str(tmp_path))
    assert get_project_root() == str(tmp_path)

    with pytest.raises(ValueError):
        get_project_root(str(tmp_path / "missing"))
