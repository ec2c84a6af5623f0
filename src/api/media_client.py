# This file implements the client for the image host that stores blog, service and team images.
# It speaks the Cloudinary REST upload/destroy API with signed requests.
# Transport failures and rejected calls are converted into one exception family so callers
# decide whether a failure is fatal (uploads) or best-effort (deletes).

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests


class MediaError(RuntimeError):
    """Base error for media host failures."""


class MediaUploadError(MediaError):
    """Raised when an image could not be stored."""


class MediaDeleteError(MediaError):
    """Raised when a stored image could not be removed."""


@dataclass(frozen=True)
class MediaAsset:
    url: str
    public_id: str


class MediaClient:
    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        timeout_seconds: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def upload_image(
        self,
        file_path: Path,
        *,
        folder: str,
        transformation: str | None = None,
    ) -> MediaAsset:
        if not self.configured:
            raise MediaUploadError("Media host credentials are not configured")

        params: dict[str, Any] = {"folder": folder, "timestamp": int(time.time())}
        if transformation:
            params["transformation"] = transformation

        try:
            with Path(file_path).open("rb") as handle:
                payload = self._post(
                    "image/upload",
                    data=self._signed(params),
                    files={"file": (Path(file_path).name, handle)},
                    error_cls=MediaUploadError,
                )
        except OSError as exc:
            raise MediaUploadError(f"Could not read staged upload {file_path}: {exc}") from exc

        url = payload.get("secure_url") or payload.get("url")
        public_id = payload.get("public_id")
        if not url or not public_id:
            raise MediaUploadError("Media host response is missing secure_url/public_id")
        return MediaAsset(url=str(url), public_id=str(public_id))

    def delete_image(self, public_id: str) -> None:
        if not self.configured:
            raise MediaDeleteError("Media host credentials are not configured")

        params = {"public_id": public_id, "timestamp": int(time.time())}
        payload = self._post("image/destroy", data=self._signed(params), files=None, error_cls=MediaDeleteError)
        result = payload.get("result")
        if result not in {"ok", "not found"}:
            raise MediaDeleteError(f"Media host refused to delete {public_id!r}: {result!r}")

    def signature(self, params: dict[str, Any]) -> str:
        """SHA-1 over the sorted `key=value` pairs followed by the API secret."""

        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        return {**params, "signature": self.signature(params), "api_key": self.api_key}

    def _post(
        self,
        path: str,
        *,
        data: dict[str, Any],
        files: dict[str, Any] | None,
        error_cls: type[MediaError],
    ) -> dict[str, Any]:
        url = f"{self.base_url}/{self.cloud_name}/{path}"
        try:
            response = self.session.post(url, data=data, files=files, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise error_cls(f"Media request failed for {url}: {exc}") from exc

        if response.status_code >= 400:
            raise error_cls(f"Media request failed with status {response.status_code} for {url}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise error_cls(f"Media host did not return valid JSON for {url}") from exc

        if not isinstance(payload, dict):
            raise error_cls(f"Unexpected payload shape from {url}")
        return payload
