"""Upload of one APK as a GitHub release asset."""

from __future__ import annotations

import json

from droidrel.core.result import Err, Ok, Result
from droidrel.core.structured import as_str_dict, get_str
from droidrel.release.errors import ReleaseError, UploadError
from droidrel.release.http import HttpClient
from droidrel.release.model import UploadedAsset

__all__ = ["APK_CONTENT_TYPE", "upload"]

APK_CONTENT_TYPE = "application/vnd.android.package-archive"


def upload(
    http: HttpClient,
    url: str,
    content: bytes,
    token: str,
    *,
    file_name: str,
) -> Result[UploadedAsset, ReleaseError]:
    """POST ``content`` to ``url`` once.

    The response must be a JSON object carrying ``browser_download_url``;
    anything else is an UploadError, whatever the HTTP status.
    """
    sent = http.request(
        "POST",
        url,
        body=content,
        headers={
            "Content-Type": APK_CONTENT_TYPE,
            "Content-Length": str(len(content)),
            "Authorization": f"Bearer {token}",
        },
    )
    if isinstance(sent, Err):
        return Err(UploadError(file_name=file_name, message=str(sent.error)))

    response = sent.value
    try:
        obj: object = json.loads(response.body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return Err(
            UploadError(
                file_name=file_name,
                message=f"unparseable response (HTTP {response.status})",
            )
        )

    data = as_str_dict(obj)
    download_url = get_str(data, "browser_download_url") if data is not None else None
    if data is None or download_url is None:
        detail = (get_str(data, "message") if data is not None else None) or "no download URL"
        return Err(
            UploadError(file_name=file_name, message=f"{detail} (HTTP {response.status})")
        )

    name = get_str(data, "name") or file_name
    return Ok(UploadedAsset(name=name, browser_download_url=download_url))
