"""Tests for destination folder reconciliation."""

from __future__ import annotations

from unittest.mock import MagicMock

from quivr_sync import FolderResult, RemoteItem, find_folder, resolve_folder


def _items() -> list[RemoteItem]:
    return [
        RemoteItem(id="1", file_name="obsidian-sync", is_folder=False),
        RemoteItem(id="2", file_name="archive", is_folder=True),
        RemoteItem(id="3", file_name="obsidian-sync", is_folder=True),
        RemoteItem(id="4", file_name="obsidian-sync", is_folder=True),
    ]


class TestFindFolder:
    """Tests for locating an existing folder."""

    def test_first_matching_folder_wins(self) -> None:
        """Test that the first folder in listing order is returned."""
        folder = find_folder(_items(), "obsidian-sync")

        assert folder is not None
        assert folder.id == "3"

    def test_file_with_same_name_is_ignored(self) -> None:
        """Test that a file named like the folder does not match."""
        items = [RemoteItem(id="1", file_name="obsidian-sync", is_folder=False)]

        assert find_folder(items, "obsidian-sync") is None

    def test_empty_listing(self) -> None:
        """Test that nothing is found in an empty listing."""
        assert find_folder([], "obsidian-sync") is None


class TestResolveFolder:
    """Tests for reusing or creating the destination folder."""

    def test_existing_folder_is_reused_without_create(self) -> None:
        """Test that an existing folder id is returned and no folder is created."""
        client = MagicMock()
        notices: list[str] = []

        result = resolve_folder(client, _items(), "obsidian-sync", notices.append)

        assert result == FolderResult(success=True, folder_id="3", created=False)
        client.create_folder.assert_not_called()
        assert "Found existing folder: obsidian-sync" in notices

    def test_missing_folder_is_created_once(self) -> None:
        """Test that exactly one create call is issued when the folder is absent."""
        client = MagicMock()
        client.create_folder.return_value = FolderResult(
            success=True, folder_id="new", created=True
        )
        items = [RemoteItem(id="2", file_name="archive", is_folder=True)]

        result = resolve_folder(client, items, "obsidian-sync")

        client.create_folder.assert_called_once_with("obsidian-sync")
        assert result.folder_id == "new"
        assert result.created

    def test_failed_creation_is_returned(self) -> None:
        """Test that a failed creation yields no folder id."""
        client = MagicMock()
        client.create_folder.return_value = FolderResult(success=False, error="boom")
        notices: list[str] = []

        result = resolve_folder(client, [], "obsidian-sync", notices.append)

        assert not result.success
        assert result.folder_id is None
        assert 'Failed to create folder "obsidian-sync".' in notices
