"""Dropbox client folders for customer orders.

Creates one folder per order under the configured root and returns a
public shared link to it. The Dropbox SDK exchanges the long-lived
refresh token for access tokens on its own.
"""

import asyncio
from typing import Optional, Tuple

import dropbox
from dropbox.exceptions import ApiError, AuthError
from dropbox.sharing import RequestedVisibility, SharedLinkSettings

from heritage_hub.core.exceptions import DropboxError
from heritage_hub.core.logger import setup_logger

logger = setup_logger(__name__)

DROPBOX_TIMEOUT = 120


def build_folder_path(root: str, customer_name: str, order_number: Optional[str]) -> str:
    """Folder path in the form "<root>/<Customer Name> - <Order Number>"."""
    folder_name = f"{customer_name} - {order_number or 'Unknown'}"
    return f"{root.rstrip('/')}/{folder_name}"


class DropboxStorage:
    """Creates customer folders and shared links in Dropbox."""

    def __init__(
        self,
        app_key: str,
        app_secret: str,
        refresh_token: str,
        root: str = "/HeritageboxClientFiles",
        client: Optional[dropbox.Dropbox] = None,
    ):
        """
        Initialize Dropbox storage.

        Args:
            app_key: Dropbox app key
            app_secret: Dropbox app secret
            refresh_token: Long-lived OAuth refresh token
            root: Parent folder for all customer folders
            client: Preconfigured SDK client (used by tests)
        """
        self.root = root
        self.client = client or dropbox.Dropbox(
            oauth2_refresh_token=refresh_token,
            app_key=app_key,
            app_secret=app_secret,
            timeout=DROPBOX_TIMEOUT,
        )

    def _create_folder(self, path: str) -> str:
        """Create the folder and return the path Dropbox actually used."""
        try:
            result = self.client.files_create_folder_v2(path, autorename=True)
        except (ApiError, AuthError) as e:
            logger.error(f"Dropbox folder creation error: {e}")
            raise DropboxError(
                f"Dropbox folder creation failed: {getattr(e, 'error', e)}",
                details=str(getattr(e, "error", e)),
            ) from e

        created_path = result.metadata.path_display or path
        logger.info(f"Folder created: {created_path}")
        return created_path

    def _get_shared_link(self, path: str) -> Optional[str]:
        """Create a public shared link, or reuse the existing one."""
        try:
            link = self.client.sharing_create_shared_link_with_settings(
                path,
                settings=SharedLinkSettings(requested_visibility=RequestedVisibility.public),
            )
            logger.info(f"Shared link created: {link.url}")
            return link.url

        except ApiError as e:
            if not e.error.is_shared_link_already_exists():
                logger.error(f"Dropbox shared link error: {e.error}")
                raise DropboxError(
                    f"Dropbox shared link failed: {e.error}", details=str(e.error)
                ) from e

            logger.info("Shared link already exists, retrieving...")
            try:
                existing = self.client.sharing_list_shared_links(path=path, direct_only=True)
            except ApiError as list_error:
                raise DropboxError(
                    f"Dropbox shared link lookup failed: {list_error.error}",
                    details=str(list_error.error),
                ) from list_error

            if existing.links:
                logger.info(f"Found existing link: {existing.links[0].url}")
                return existing.links[0].url

            logger.warning(f"No existing shared link returned for {path}")
            return None

    def create_client_folder_sync(
        self,
        customer_name: str,
        order_number: Optional[str],
    ) -> Tuple[str, Optional[str]]:
        """
        Create the order folder and its shared link.

        Returns:
            Tuple of (folder_path, shared_link)
        """
        path = build_folder_path(self.root, customer_name, order_number)
        logger.info(f"Creating Dropbox folder: {path}")

        created_path = self._create_folder(path)
        return created_path, self._get_shared_link(created_path)

    async def create_client_folder(
        self,
        customer_name: str,
        order_number: Optional[str],
    ) -> Tuple[str, Optional[str]]:
        """Async wrapper; the SDK is blocking so it runs in a worker thread."""
        return await asyncio.to_thread(
            self.create_client_folder_sync, customer_name, order_number
        )
