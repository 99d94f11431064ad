"""
Google Drive listing client.
Fetches folder listings page by page from the Drive v3 files API.
"""

from typing import Optional
import httpx

from core.config import settings
from core.exceptions import UpstreamError, ConfigurationError
from core.logging import get_logger
from models.domain.drive import RemotePage

logger = get_logger(__name__)

LIST_FIELDS = "files(id,name,mimeType,thumbnailLink),nextPageToken"


def folder_query(folder_id: str) -> str:
    """Drive search expression for non-trashed children of a folder."""
    return f"'{folder_id}' in parents and trashed = false"


class GoogleDriveClient:
    """
    Read-only client for publicly shared Drive folders (API key auth).

    One call to `fetch_page` is one HTTP request; following
    continuation tokens is left to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        page_size: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.api_url = api_url or settings.drive_api_url
        self.page_size = min(page_size or settings.drive_page_size, 1000)
        self.timeout = timeout or settings.drive_timeout_seconds
        self._transport = transport

    def _params(self, folder_id: str, page_token: Optional[str]) -> dict:
        params = {
            "q": folder_query(folder_id),
            "fields": LIST_FIELDS,
            "pageSize": str(self.page_size),
            "key": self.api_key,
        }
        if page_token:
            params["pageToken"] = page_token
        return params

    async def fetch_page(self, folder_id: str, page_token: Optional[str] = None) -> RemotePage:
        """
        Fetch one page of a folder listing.

        Args:
            folder_id: Drive folder ID
            page_token: Continuation token from the previous page

        Returns:
            RemotePage with files and the next continuation token

        Raises:
            ConfigurationError: GOOGLE_API_KEY is not set
            UpstreamError: request failed or folder is not accessible
        """
        if not self.api_key:
            logger.error("GOOGLE_API_KEY not configured")
            raise ConfigurationError("Google API key not configured", setting="GOOGLE_API_KEY")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(self.api_url, params=self._params(folder_id, page_token))
        except httpx.HTTPError as e:
            logger.error(f"Google Drive request failed for folder {folder_id}: {e}")
            raise UpstreamError(folder_id=folder_id)

        if response.status_code != 200:
            logger.error(f"Google Drive API error ({response.status_code}): {response.text[:500]}")
            raise UpstreamError(folder_id=folder_id, upstream_status=response.status_code)

        try:
            return RemotePage.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unexpected Google Drive response for folder {folder_id}: {e}")
            raise UpstreamError(folder_id=folder_id, upstream_status=response.status_code)
