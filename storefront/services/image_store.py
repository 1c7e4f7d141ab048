# storefront/services/image_store.py
from typing import Iterable, List

import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    STORAGE_SERVICE_URL,
    STORAGE_BUCKET,
    STORAGE_API_KEY,
    HTTP_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_image_paths(paths: Iterable[str]) -> List[str]:
    """Strip one leading '/', drop blanks and duplicates, keep first-seen order."""
    seen = set()
    result = []
    for path in paths:
        if not isinstance(path, str):
            continue
        path = path.strip()
        if path.startswith("/"):
            path = path[1:]
        if not path or path in seen:
            continue
        seen.add(path)
        result.append(path)
    return result


class ImageStore:
    def __init__(
        self,
        base_url: str | None = None,
        bucket: str | None = None,
        api_key: str | None = None,
        timeout: int = HTTP_TIMEOUT_SECONDS,
    ):
        self.base_url = (base_url or STORAGE_SERVICE_URL).rstrip("/")
        self.bucket = bucket or STORAGE_BUCKET
        self.api_key = STORAGE_API_KEY if api_key is None else api_key
        self.timeout = timeout

    @http_retry()
    def delete_objects(self, paths: List[str]) -> None:
        if not paths:
            return
        url = f"{self.base_url}/object/{self.bucket}"
        logger.info(f"ImageStore DELETE {url} ({len(paths)} objects)")
        resp = requests.delete(
            url,
            json={"prefixes": paths},
            headers={"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
