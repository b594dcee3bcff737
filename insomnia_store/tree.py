"""Folder tree resolver.

Answers hierarchy questions over an in-memory snapshot of RequestGroup
records: which workspace a folder or request belongs to, where a new child
may be placed, whether a move would create a cycle, and which folders a
cascading delete must remove.

Pure functions over the snapshot -- no I/O.  Parent walks always carry a
visited set, so a malformed cycle already on disk ends the walk instead of
looping forever.
"""

from __future__ import annotations

from collections.abc import Iterable

from insomnia_store.errors import CycleError, FolderNotFoundError
from insomnia_store.store.codec import Record


class FolderTree:
    """Lookup of RequestGroup records by id."""

    def __init__(self, folders: Iterable[Record]) -> None:
        self._folders: dict[str, Record] = {}
        for folder in folders:
            self._folders[folder["_id"]] = folder

    def get(self, folder_id: str) -> Record | None:
        return self._folders.get(folder_id)

    # -- Membership ------------------------------------------------------------

    def belongs_to_workspace(self, folder: Record, workspace_id: str) -> bool:
        parent_id = folder.get("parentId")
        visited: set[str] = set()
        while parent_id:
            if parent_id == workspace_id:
                return True
            if parent_id in visited:
                return False
            visited.add(parent_id)
            parent = self._folders.get(parent_id)
            if parent is None:
                return False
            parent_id = parent.get("parentId")
        return False

    def request_belongs_to_workspace(self, request: Record, workspace_id: str) -> bool:
        parent_id = request.get("parentId")
        if parent_id == workspace_id:
            return True
        folder = self._folders.get(parent_id) if parent_id else None
        if folder is None:
            return False
        return self.belongs_to_workspace(folder, workspace_id)

    def folders_for_workspace(self, workspace_id: str, folders: Iterable[Record] | None = None) -> list[Record]:
        """Folders owned by the workspace, in the order given (default: lookup order)."""
        source = self._folders.values() if folders is None else folders
        return [folder for folder in source if self.belongs_to_workspace(folder, workspace_id)]

    def requests_for_workspace(self, workspace_id: str, requests: Iterable[Record]) -> list[Record]:
        return [request for request in requests if self.request_belongs_to_workspace(request, workspace_id)]

    def ensure_in_workspace(self, folder_id: str, workspace_id: str) -> Record:
        """Return the folder, or raise ``FolderNotFoundError`` if absent or foreign."""
        folder = self._folders.get(folder_id)
        if folder is None or not self.belongs_to_workspace(folder, workspace_id):
            raise FolderNotFoundError(folder_id, workspace_id)
        return folder

    # -- Placement -------------------------------------------------------------

    def resolve_parent(self, workspace_id: str, parent_id: str | None) -> str:
        """Normalize a requested folder parent.

        ``None``, empty, or the workspace id itself mean "top level"; any
        other id must be a folder of this workspace.
        """
        if not parent_id or parent_id == workspace_id:
            return workspace_id
        return self.ensure_in_workspace(parent_id, workspace_id)["_id"]

    def resolve_request_parent(self, workspace_id: str, folder_id: str | None) -> str:
        """Normalize a requested request location.  Same rules as folders."""
        return self.resolve_parent(workspace_id, folder_id)

    def ensure_no_cycle(self, folder_id: str, parent_id: str) -> None:
        """Raise ``CycleError`` if ``parent_id`` is ``folder_id`` or one of its descendants."""
        current: str | None = parent_id
        visited: set[str] = set()
        while current:
            if current == folder_id:
                raise CycleError(folder_id, parent_id)
            if current in visited:
                return
            visited.add(current)
            parent = self._folders.get(current)
            if parent is None:
                return
            current = parent.get("parentId")

    # -- Cascade ---------------------------------------------------------------

    def descendant_ids(self, folder_id: str) -> set[str]:
        """The folder itself plus every folder transitively parented under it."""
        children: dict[str, list[str]] = {}
        for folder in self._folders.values():
            parent_id = folder.get("parentId")
            if parent_id:
                children.setdefault(parent_id, []).append(folder["_id"])

        found: set[str] = set()
        stack = [folder_id]
        while stack:
            current = stack.pop()
            if current in found:
                continue
            found.add(current)
            stack.extend(children.get(current, ()))
        return found
