from __future__ import annotations

import json
import os
import shutil
from pathlib import Path

from uritemplate import URITemplate

from droidrel.core.result import Err, Ok, Result
from droidrel.core.structured import as_str_dict, get_int, get_str
from droidrel.platform.process import run as run_process
from droidrel.release.errors import FileIoError, GitHubApiError, ReleaseError, TokenMissing
from droidrel.release.http import HttpClient, HttpResponse
from droidrel.release.model import GhRelease

GITHUB_API = "https://api.github.com"
GH_TIMEOUT_SECONDS = 60.0
TOKEN_ENV_VAR = "GITHUB_TOKEN"


def read_token(*, workspace_root: Path, token_file: Path | None) -> Result[str, ReleaseError]:
    """Find a GitHub token.

    Sources, first non-empty wins: the GITHUB_TOKEN environment variable,
    ``token_file``, then ``gh auth token``.
    """
    env_token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    if env_token:
        return Ok(env_token)

    if token_file is not None:
        path = token_file.expanduser()
        try:
            file_token = path.read_text(encoding="utf-8").strip()
        except OSError as e:
            return Err(FileIoError(path=path, message=f"failed to read token: {e}"))
        if file_token:
            return Ok(file_token)

    if shutil.which("gh") is not None:
        result = run_process(
            ["gh", "auth", "token"], cwd=workspace_root, timeout=GH_TIMEOUT_SECONDS
        )
        if isinstance(result, Ok) and result.value.strip():
            return Ok(result.value.strip())

    return Err(TokenMissing())


def expand_upload_url(template: str, **values: str | None) -> str:
    """Expand an RFC 6570 URI template such as ``.../assets{?name,label}``.

    Variables passed as None are left undefined and drop out of the URL.
    """
    defined = {name: value for name, value in values.items() if value is not None}
    return URITemplate(template).expand(defined)


def _api_headers(token: str) -> dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


def _json_body(response: HttpResponse, *, what: str) -> Result[dict[str, object], ReleaseError]:
    try:
        obj: object = json.loads(response.body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(GitHubApiError(message=f"{what}: invalid JSON: {e}", status=response.status))

    data = as_str_dict(obj)
    if data is None:
        return Err(GitHubApiError(message=f"{what}: unexpected payload", status=response.status))

    if not response.ok:
        detail = get_str(data, "message") or "request failed"
        return Err(GitHubApiError(message=f"{what}: {detail}", status=response.status))
    return Ok(data)


def create_release(
    http: HttpClient,
    *,
    token: str,
    repo: str,
    tag: str,
    is_prerelease: bool,
) -> Result[GhRelease, ReleaseError]:
    """Create the GitHub release ``tag`` in ``repo`` (owner/name).

    GitHub creates the tag from the default branch when it does not exist.
    """
    url = f"{GITHUB_API}/repos/{repo}/releases"
    payload = {
        "tag_name": tag,
        "name": tag,
        "draft": False,
        "prerelease": is_prerelease,
    }
    sent = http.request(
        "POST",
        url,
        body=json.dumps(payload).encode("utf-8"),
        headers=_api_headers(token),
    )
    if isinstance(sent, Err):
        return Err(GitHubApiError(message=f"create release {tag}: {sent.error}"))

    data = _json_body(sent.value, what=f"create release {tag}")
    if isinstance(data, Err):
        return data

    release_id = get_int(data.value, "id")
    upload_url = get_str(data.value, "upload_url")
    if release_id is None or upload_url is None:
        return Err(
            GitHubApiError(
                message=f"create release {tag}: missing id or upload_url",
                status=sent.value.status,
            )
        )
    return Ok(
        GhRelease(
            id=release_id,
            upload_url=upload_url,
            html_url=get_str(data.value, "html_url"),
        )
    )


def update_release_body(
    http: HttpClient,
    *,
    token: str,
    repo: str,
    release_id: int,
    body: str,
) -> Result[None, ReleaseError]:
    url = f"{GITHUB_API}/repos/{repo}/releases/{release_id}"
    sent = http.request(
        "PATCH",
        url,
        body=json.dumps({"body": body}).encode("utf-8"),
        headers=_api_headers(token),
    )
    if isinstance(sent, Err):
        return Err(GitHubApiError(message=f"update release notes: {sent.error}"))

    data = _json_body(sent.value, what="update release notes")
    if isinstance(data, Err):
        return data
    return Ok(None)
