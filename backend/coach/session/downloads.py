import logging
import uuid
from pathlib import Path
from typing import Dict, Optional

from ..config import settings
from .capabilities import Blob, Downloader


class FileDownloader(Downloader):
    """Saves downloads into a directory instead of a browser's downloads folder."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = Path(directory or settings.STORAGE_RECORDINGS)
        self.urls: Dict[str, Blob] = {}
        self.logger = logging.getLogger("coach")

    def create_object_url(self, blob: Blob) -> str:
        url = f"blob:{uuid.uuid4()}"
        self.urls[url] = blob
        return url

    def download(self, url: str, filename: str) -> None:
        blob = self.urls.get(url)
        if blob is None:
            raise KeyError(f"unknown object url: {url}")
        save_path = self.directory / filename
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "wb") as f:
            for part in blob.parts:
                f.write(part)
        self.logger.info("download.saved path=%s size_bytes=%d type=%s", save_path, blob.size, blob.type)

    def revoke_object_url(self, url: str) -> None:
        self.urls.pop(url, None)
