"""Integrations module - Dropbox client folders."""

from heritage_hub.integrations.dropbox_storage import DropboxStorage, build_folder_path

__all__ = ["DropboxStorage", "build_folder_path"]
