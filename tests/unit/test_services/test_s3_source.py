"""Tests for S3ObjectSource and the S3 gateway."""

import asyncio
from datetime import datetime
from unittest.mock import MagicMock

from pagewrap.gateways.s3 import S3
from pagewrap.services.s3_source import ObjectPage, S3ObjectSource


def _s3_object(key: str, size: int = 1024) -> dict:
    return {"Key": key, "Size": size, "LastModified": datetime(2024, 5, 1, 10, 30)}


def test_list_objects_page_passes_paging_parameters():
    client = MagicMock()
    client.list_objects_v2.return_value = {
        "Contents": [_s3_object("logs/a.txt")],
        "IsTruncated": True,
        "NextContinuationToken": "token-2",
    }

    result = S3.list_objects_page(client=client, s3_uri="s3://bucket/logs/", page_size=50, continuation_token="token-1")

    client.list_objects_v2.assert_called_once_with(
        Bucket="bucket", Prefix="logs/", MaxKeys=50, ContinuationToken="token-1"
    )
    assert result["is_truncated"] is True
    assert result["next_token"] == "token-2"
    assert result["objects"][0]["Key"] == "logs/a.txt"


def test_pages_follow_continuation_tokens():
    client = MagicMock()
    client.list_objects_v2.side_effect = [
        {"Contents": [_s3_object("logs/a.txt"), _s3_object("logs/b.txt")], "IsTruncated": True, "NextContinuationToken": "t2"},
        {"Contents": [_s3_object("logs/c.txt")], "IsTruncated": False},
    ]
    source = S3ObjectSource("s3://bucket/logs/", page_size=2, client=client)

    first = asyncio.run(source.fetch_page(1))
    second = asyncio.run(source.fetch_page(2))

    assert [obj["key"] for obj in first.objects] == ["a.txt", "b.txt"]
    # More objects exist, so one extra slot stays open
    assert first.total_count == 3
    assert second.total_count == 3
    assert S3ObjectSource.is_error(second) is False

    second_call = client.list_objects_v2.call_args_list[1]
    assert second_call.kwargs["ContinuationToken"] == "t2"
    assert "ContinuationToken" not in client.list_objects_v2.call_args_list[0].kwargs


def test_object_fields_are_mapped():
    client = MagicMock()
    client.list_objects_v2.return_value = {"Contents": [_s3_object("logs/a.txt", size=2048)], "IsTruncated": False}
    source = S3ObjectSource("s3://bucket/logs/", client=client)

    page = asyncio.run(source.fetch_page(1))

    assert S3ObjectSource.get_items(page) == [{"key": "a.txt", "size": 2048, "modified": "2024-05-01 10:30"}]


def test_empty_prefix_reports_zero_total():
    client = MagicMock()
    client.list_objects_v2.return_value = {"IsTruncated": False}
    source = S3ObjectSource("s3://bucket/nothing/", client=client)

    page = asyncio.run(source.fetch_page(1))

    assert page == ObjectPage(objects=[], total_count=0)
    assert S3ObjectSource.get_total_count(page) == 0


def test_client_errors_become_error_pages():
    client = MagicMock()
    client.list_objects_v2.side_effect = Exception("AccessDenied")
    source = S3ObjectSource("s3://bucket/logs/", client=client)

    page = asyncio.run(source.fetch_page(1))

    assert S3ObjectSource.is_error(page) is True
    assert "AccessDenied" in page.error


def test_page_without_token_is_an_error():
    client = MagicMock()
    source = S3ObjectSource("s3://bucket/logs/", client=client)

    page = asyncio.run(source.fetch_page(3))

    assert S3ObjectSource.is_error(page) is True
    client.list_objects_v2.assert_not_called()


def test_create_client_uses_configured_settings(monkeypatch):
    session_cls = MagicMock()
    monkeypatch.setattr("pagewrap.gateways.s3.boto3.Session", session_cls)
    monkeypatch.setattr(S3, "_profile_name", "work")
    monkeypatch.setattr(S3, "_endpoint_url", "http://localhost:9000")
    monkeypatch.setattr(S3, "_region_name", "us-east-1")

    client = S3.create_client()

    session_cls.assert_called_once_with(profile_name="work")
    session_cls.return_value.client.assert_called_once_with(
        "s3", endpoint_url="http://localhost:9000", region_name="us-east-1"
    )
    assert client is session_cls.return_value.client.return_value
