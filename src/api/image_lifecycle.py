# This file ties a document's remote image to the document's own lifetime.
# Uploads are fatal on failure and always remove the staged local file.
# Deletes are best-effort: a failed remote delete is logged and never blocks the document write.

from __future__ import annotations

import logging

from src.api.error_handlers import UploadError
from src.api.media_client import MediaAsset, MediaClient, MediaError
from src.api.uploads import StagedUpload

LOGGER = logging.getLogger("media")

# Cloudinary transformation strings per resource.
BLOG_TRANSFORMATION = "c_fill,h_600,w_800/q_auto"
TEAM_TRANSFORMATION = "c_fill,h_400,q_auto,w_400"


class ImageManager:
    """Upload/replace/delete coordination for one resource folder."""

    def __init__(self, *, media: MediaClient, folder: str, transformation: str | None = None) -> None:
        self.media = media
        self.folder = folder
        self.transformation = transformation

    def upload(self, staged: StagedUpload) -> MediaAsset:
        try:
            asset = self.media.upload_image(
                staged.path,
                folder=self.folder,
                transformation=self.transformation,
            )
        except MediaError as exc:
            LOGGER.error("Image upload to %s failed: %s", self.folder, exc)
            raise UploadError(reason=str(exc)) from exc
        finally:
            staged.discard()
        LOGGER.info("Uploaded image %s to %s", asset.public_id, self.folder)
        return asset

    def replace(self, staged: StagedUpload, previous_public_id: str | None) -> MediaAsset:
        """Drop the previous asset (best-effort) and upload the new one."""

        self.discard_remote(previous_public_id)
        return self.upload(staged)

    def discard_remote(self, public_id: str | None) -> None:
        if not public_id:
            return
        try:
            self.media.delete_image(public_id)
        except MediaError as exc:
            LOGGER.warning("Could not delete image %s: %s", public_id, exc)
            return
        LOGGER.info("Deleted image %s", public_id)
