"""QuivrClient: thin wrapper around the Quivr knowledge REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from quivr_sync.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from quivr_sync.exceptions import ConfigError
from quivr_sync.models import FolderResult, KnowledgeData, ListResult, RemoteItem, UploadResult

logger = logging.getLogger(__name__)

LIST_ENDPOINT = "/knowledge/files"
KNOWLEDGE_ENDPOINT = "/knowledge/"

MARKDOWN_CONTENT_TYPE = "text/markdown"
FALLBACK_CONTENT_TYPE = "application/pdf"


def content_type_for(name: str) -> str:
    """Return the upload content type for a file name or bare extension.

    Only markdown is recognised; everything else is sent as PDF.
    """
    extension = name.rsplit(".", 1)[-1].lower()
    return MARKDOWN_CONTENT_TYPE if extension == "md" else FALLBACK_CONTENT_TYPE


def _describe(response: httpx.Response) -> str:
    return f"{response.status_code} {response.text}".strip()


class QuivrClient:
    """Client for the Quivr knowledge API.

    Remote failures never raise; every operation returns a result object
    whose ``success`` flag tells the caller whether to continue.

    Example:
        with QuivrClient("api-key") as client:
            listing = client.list_items()
            if listing.success:
                print([item.file_name for item in listing.items])
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Quivr API key, sent as a bearer token
            api_url: Base URL of the Quivr API
            timeout: Request timeout in seconds
            http_client: Optional pre-configured httpx client

        Raises:
            ConfigError: If no API key is given
        """
        if not api_key:
            raise ConfigError("API key not configured. Run 'quivr-sync set-key' first.")
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    def __enter__(self) -> QuivrClient:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=httpx.Timeout(self.timeout))
            self._owns_client = True
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _url(self, endpoint: str) -> str:
        return f"{self.api_url}{endpoint}"

    def list_items(self) -> ListResult:
        """List every file and folder visible to the API key."""
        try:
            response = self._get_client().get(self._url(LIST_ENDPOINT), headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Error fetching files: {e}")
            return ListResult(success=False, error=f"Error fetching files: {e}")

        if response.status_code != 200:
            message = f"Failed to fetch files: {_describe(response)}"
            logger.error(message)
            return ListResult(success=False, error=message, status_code=response.status_code)

        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
            items = [RemoteItem.from_dict(entry) for entry in payload]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            message = f"Unexpected file listing from Quivr: {e}"
            logger.error(message)
            return ListResult(success=False, error=message, status_code=response.status_code)

        logger.info(f"Fetched {len(items)} item(s) from Quivr")
        return ListResult(success=True, items=items, status_code=response.status_code)

    def create_folder(self, name: str) -> FolderResult:
        """Create a top-level folder.

        Args:
            name: Folder name

        Returns:
            FolderResult carrying the new folder id on success
        """
        knowledge_data = KnowledgeData(parent_id=None, file_name=name, is_folder=True)
        files = {"knowledge_data": (None, knowledge_data.to_json())}
        try:
            response = self._get_client().post(
                self._url(KNOWLEDGE_ENDPOINT), headers=self._headers(), files=files
            )
        except httpx.HTTPError as e:
            logger.error(f'Error creating folder "{name}": {e}')
            return FolderResult(success=False, error=f'Error creating folder "{name}": {e}')

        if response.status_code != 200:
            message = f'Failed to create folder "{name}": {_describe(response)}'
            logger.error(message)
            return FolderResult(success=False, error=message)

        try:
            folder_id = response.json().get("id")
        except (ValueError, AttributeError):
            folder_id = None
        if not folder_id:
            message = f'Quivr did not return an id for folder "{name}"'
            logger.error(message)
            return FolderResult(success=False, error=message)

        logger.info(f'Created folder "{name}" with id {folder_id}')
        return FolderResult(success=True, folder_id=str(folder_id), created=True)

    def upload_file(
        self,
        knowledge_data: KnowledgeData,
        content: bytes,
        content_type: str | None = None,
    ) -> UploadResult:
        """Upload one file.

        Args:
            knowledge_data: Metadata; its file_name is also the multipart filename
            content: Raw file bytes
            content_type: Content type of the file part (derived from the name if omitted)

        Returns:
            UploadResult with the decoded response body on success
        """
        file_name = knowledge_data.file_name
        content_type = content_type or content_type_for(file_name)
        files = {
            "knowledge_data": (None, knowledge_data.to_json()),
            "file": (file_name, content, content_type),
        }
        try:
            response = self._get_client().post(
                self._url(KNOWLEDGE_ENDPOINT), headers=self._headers(), files=files
            )
        except httpx.HTTPError as e:
            error_msg = f'Error uploading file "{file_name}": {e}'
            logger.error(error_msg)
            return UploadResult(
                success=False,
                file_name=file_name,
                parent_id=knowledge_data.parent_id,
                error=error_msg,
            )

        if response.status_code != 200:
            error_msg = f'Error uploading file "{file_name}": {_describe(response)}'
            logger.error(error_msg)
            return UploadResult(
                success=False,
                file_name=file_name,
                parent_id=knowledge_data.parent_id,
                error=error_msg,
                status_code=response.status_code,
            )

        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        logger.info(f"Successfully uploaded {file_name}")
        return UploadResult(
            success=True,
            file_name=file_name,
            parent_id=knowledge_data.parent_id,
            status_code=response.status_code,
            response=body,
        )

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            self._client.close()
        self._client = None
