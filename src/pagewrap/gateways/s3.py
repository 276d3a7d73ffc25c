from collections import namedtuple
from functools import wraps
from urllib.parse import urlparse

import boto3
from loguru import logger


class S3:
    _endpoint_url: str | None = None
    _region_name: str | None = None
    _profile_name: str | None = None

    # -------------------------Settings------------------------- #

    @classmethod
    def set_endpoint_url(cls, endpoint_url: str | None) -> None:
        cls._endpoint_url = endpoint_url

    @classmethod
    def set_region_name(cls, region_name: str | None) -> None:
        cls._region_name = region_name

    @classmethod
    def set_profile_name(cls, profile_name: str | None) -> None:
        cls._profile_name = profile_name

    @classmethod
    def create_client(cls):
        """Create an S3 client from the configured profile and endpoint."""
        session = boto3.Session(profile_name=cls._profile_name)
        return session.client("s3", endpoint_url=cls._endpoint_url, region_name=cls._region_name)

    # -------------------------Helpers------------------------- #

    @staticmethod
    def resolve_s3_location(s3_path):
        """Resolve S3 path to bucket and file_key.
        Args:
            s3_path (str): S3 file location (e.g., s3://<bucket_name>/<file_key>)
        Returns:
            namedtuple: Named tuple with bucket and file_key attributes.
        """
        s3_loc_obj = namedtuple("s3_location", ["bucket", "file_key"])
        s3_res = urlparse(s3_path)
        s3_loc = s3_loc_obj(s3_res.netloc, s3_res.path[1:])

        return s3_loc

    @staticmethod
    def get_client(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not kwargs.get("client"):
                # Create a new S3 client if not provided
                kwargs["client"] = S3.create_client()
            return func(*args, **kwargs)

        return wrapper

    @staticmethod
    def resolve_s3_uri(func):
        @wraps(func)
        def wrapper(*args, s3_uri: str = None, bucket_name: str = None, prefix: str = None, **kwargs):
            if not s3_uri and not bucket_name:
                raise ValueError("Either s3_uri or bucket and key must be provided")
            if s3_uri:
                bucket_name, prefix = S3.resolve_s3_location(s3_uri)
            return func(*args, bucket_name=bucket_name, prefix=prefix or "", **kwargs)

        return wrapper

    # -------------------------List------------------------- #

    @get_client
    @resolve_s3_uri
    @staticmethod
    def list_objects_page(
        client: boto3.client,
        *,
        bucket_name: str,
        prefix: str = None,
        page_size: int = 100,
        continuation_token: str | None = None,
    ) -> dict:
        """List a single page of objects in a bucket.

        Returns:
            dict with ``objects`` (the raw ``Contents`` entries), ``is_truncated``
            and ``next_token`` (the continuation token for the following page).
        """
        params = {"Bucket": bucket_name, "Prefix": prefix or "", "MaxKeys": page_size}
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        logger.info(f"Listing objects in bucket '{bucket_name}' with prefix '{prefix}' (max {page_size})")
        response = client.list_objects_v2(**params)

        return {
            "objects": response.get("Contents", []),
            "is_truncated": response.get("IsTruncated", False),
            "next_token": response.get("NextContinuationToken"),
        }
