import asyncio

import pytest

from docstore.api.exceptions import (
    BackingStoreError,
    DocumentNotFoundError,
    DocumentValidationError,
    RevisionConflictError
)
from docstore.domain.entities import EntryType


def run(coro):
    return asyncio.run(coro)


def test_get_decodes_content_and_reports_logical_path(service, github):
    github.files["docs/ftl/canon.md"] = "Emoji 😘 and 漢字"

    document = run(service.get("ftl/canon.md"))

    assert document.path == "ftl/canon.md"
    assert document.repository_path == "docs/ftl/canon.md"
    assert document.name == "canon.md"
    assert document.sha == github.sha_of("Emoji 😘 and 漢字")
    assert document.content == "Emoji 😘 and 漢字"


def test_get_missing_document_is_not_found(service):
    with pytest.raises(DocumentNotFoundError, match="Document not found"):
        run(service.get("nope.md"))


def test_get_directory_is_validation_error(service, github):
    github.files["docs/ftl/canon.md"] = "x"

    with pytest.raises(DocumentValidationError, match="not a file"):
        run(service.get("ftl"))


def test_get_refuses_content_github_did_not_inline(service, github):
    github.scripted["GET"] = (200, {
        "type": "file",
        "path": "docs/big.md",
        "name": "big.md",
        "sha": "s",
        "size": 5000000,
        "content": "",
        "encoding": "none",
    })

    with pytest.raises(DocumentValidationError, match="not available inline"):
        run(service.get("big.md"))


def test_put_creates_without_sha_and_with_create_message(service, github):
    result = run(service.put("notes/new.md", "fresh"))

    put = github.calls_for("PUT")[0]
    assert "sha" not in put.body
    assert put.body["message"] == "Create docs/notes/new.md"
    assert put.body["branch"] == "main"
    assert result.path == "notes/new.md"
    assert result.name == "new.md"
    assert result.sha == github.sha_of("fresh")
    assert result.commit_message == "Create docs/notes/new.md"
    assert github.files["docs/notes/new.md"] == "fresh"


def test_put_updates_with_discovered_sha_and_update_message(service, github):
    github.files["docs/a.md"] = "old"

    run(service.put("a.md", "new"))

    [get] = github.calls_for("GET")
    [put] = github.calls_for("PUT")
    assert get.path == "docs/a.md"
    assert put.body["sha"] == github.sha_of("old")
    assert put.body["message"] == "Update docs/a.md"
    assert github.files["docs/a.md"] == "new"


def test_put_uses_caller_message(service, github):
    run(service.put("a.md", "text", "Write a.md"))

    assert github.calls_for("PUT")[0].body["message"] == "Write a.md"


def test_put_fails_closed_when_discovery_errors(service, github):
    github.scripted["GET"] = (500, {"message": "Server Error"})

    with pytest.raises(BackingStoreError, match="Server Error"):
        run(service.put("a.md", "text"))

    assert github.calls_for("PUT") == []


def test_put_onto_directory_is_rejected_without_write(service, github):
    github.files["docs/dir/child.md"] = "x"

    with pytest.raises(DocumentValidationError):
        run(service.put("dir", "text"))

    assert github.calls_for("PUT") == []


def test_put_write_404_means_repository_or_branch_missing(service, github):
    github.scripted["PUT"] = (404, {"message": "Not Found"})

    with pytest.raises(DocumentNotFoundError, match="Repository or branch not found"):
        run(service.put("a.md", "text"))


def test_put_surfaces_stale_revision(service, github):
    github.files["docs/a.md"] = "old"
    github.scripted["PUT"] = (409, {"message": "docs/a.md does not match"})

    with pytest.raises(RevisionConflictError):
        run(service.put("a.md", "new"))

    assert len(github.calls_for("PUT")) == 1


def test_delete_uses_discovered_sha(service, github):
    github.files["docs/a.md"] = "bye"

    result = run(service.delete("a.md"))

    [delete] = github.calls_for("DELETE")
    assert delete.body["sha"] == github.sha_of("bye")
    assert delete.body["message"] == "Delete docs/a.md"
    assert result.path == "a.md"
    assert result.commit_sha == "commit-1"
    assert "docs/a.md" not in github.files


def test_delete_absent_document_never_issues_delete(service, github):
    with pytest.raises(DocumentNotFoundError):
        run(service.delete("missing.md", "Delete missing"))

    assert github.calls_for("DELETE") == []


def test_delete_accepts_base_prefixed_path(service, github):
    github.files["docs/test.md"] = "x"

    result = run(service.delete("/docs/test.md"))

    assert result.path == "test.md"
    assert github.calls_for("DELETE")[0].path == "docs/test.md"


def test_list_root_reports_logical_paths(service, github):
    github.files["docs/a.md"] = "a"
    github.files["docs/ftl/canon.md"] = "c"

    entries = run(service.list())

    assert [(e.name, e.path, e.type) for e in entries] == [
        ("a.md", "a.md", EntryType.FILE),
        ("ftl", "ftl/", EntryType.DIRECTORY),
    ]
    assert github.calls[0].path == "docs"
    assert github.calls[0].params == {"ref": "main"}


def test_list_of_a_file_is_a_single_entry(service, github):
    github.scripted["GET"] = (200, {"type": "file", "path": "docs/ftl", "name": "ftl", "sha": "s"})

    entries = run(service.list("ftl"))

    assert len(entries) == 1
    assert entries[0].path == "ftl"
    assert entries[0].type is EntryType.FILE


def test_list_missing_directory_is_not_found(service):
    with pytest.raises(DocumentNotFoundError, match="Directory not found"):
        run(service.list("nowhere"))
