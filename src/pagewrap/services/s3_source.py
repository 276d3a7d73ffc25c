"""Page source listing the objects under an S3 prefix."""

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from pagewrap.gateways.s3 import S3


@dataclass
class ObjectPage:
    """One page of an S3 listing. ``error`` is set when the request failed."""

    objects: list[dict] = field(default_factory=list)
    total_count: int = 0
    error: str | None = None


class S3ObjectSource:
    """Fetches S3 objects page by page, following continuation tokens."""

    def __init__(self, s3_uri: str, page_size: int = 100, client=None):
        self.s3_uri = s3_uri
        self.bucket_name, self.prefix = S3.resolve_s3_location(s3_uri)
        self.page_size = page_size
        self._client = client
        # Continuation token needed to fetch each page number; page 1 needs none
        self._tokens: dict[int, str | None] = {1: None}
        self._seen_count: dict[int, int] = {0: 0}

    @property
    def label(self) -> str:
        return self.s3_uri

    async def fetch_page(self, page_number: int) -> ObjectPage:
        if page_number not in self._tokens:
            return ObjectPage(error=f"Page {page_number} requested before page {page_number - 1}")

        try:
            response = await asyncio.to_thread(
                S3.list_objects_page,
                client=self._client,
                bucket_name=self.bucket_name,
                prefix=self.prefix,
                page_size=self.page_size,
                continuation_token=self._tokens[page_number],
            )
        except Exception as e:
            logger.error(f"Listing {self.s3_uri} page {page_number} failed: {e}")
            return ObjectPage(error=str(e))

        objects = [self._to_ui_object(obj) for obj in response["objects"]]
        seen = self._seen_count.get(page_number - 1, 0) + len(objects)
        self._seen_count[page_number] = seen

        if response["is_truncated"] and response["next_token"]:
            self._tokens[page_number + 1] = response["next_token"]
            # S3 does not report a total, so keep one more slot open
            total_count = seen + 1
        else:
            total_count = seen

        return ObjectPage(objects=objects, total_count=total_count)

    def _to_ui_object(self, s3_object: dict) -> dict:
        """Transform an S3 listing entry into a UI-friendly dict."""
        key = s3_object["Key"]
        modified = s3_object.get("LastModified")
        return {
            "key": key[len(self.prefix) :] or key,
            "size": s3_object.get("Size", 0),
            "modified": modified.strftime("%Y-%m-%d %H:%M") if modified else "",
        }

    # Accessors for PaginationController

    @staticmethod
    def is_error(page: ObjectPage) -> bool:
        return page.error is not None

    @staticmethod
    def get_total_count(page: ObjectPage) -> int:
        return page.total_count

    @staticmethod
    def get_items(page: ObjectPage) -> list[dict]:
        return page.objects
