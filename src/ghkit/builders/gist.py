"""Gist editing."""

from typing import Any

from ..models.gist import Gist

__all__ = ["GistUpdater"]


class GistUpdater:
    """Batches file and description changes into one PATCH.

    Deleting a file sends ``{"files": {"<name>": null}}``; that explicit null
    is what the API expects.
    """

    def __init__(self, base: Gist) -> None:
        self.base = base
        self.requester = base.root.create_request()
        self.files: dict[str, dict[str, Any] | None] = {}

    def _file(self, name: str) -> dict[str, Any]:
        entry = self.files.get(name)
        if entry is None:
            entry = {}
            self.files[name] = entry
        return entry

    def add_file(self, name: str, content: str) -> "GistUpdater":
        return self.update_file(name, content)

    def delete_file(self, name: str) -> "GistUpdater":
        self.files[name] = None
        return self

    def description(self, description: str) -> "GistUpdater":
        self.requester.with_param("description", description)
        return self

    def rename_file(self, name: str, new_name: str) -> "GistUpdater":
        self._file(name)["filename"] = new_name
        return self

    def update_file(self, name: str, content: str, new_name: str | None = None) -> "GistUpdater":
        entry = self._file(name)
        entry["content"] = content
        if new_name is not None:
            entry["filename"] = new_name
        return self

    def update(self) -> Gist:
        return (
            self.requester.with_param("files", self.files)
            .method("PATCH")
            .with_url_path(self.base.api_tail_url())
            .fetch(Gist)
        )
