"""Object storage for uploaded images.

Policy for the `app-images` bucket: anyone may read; an authenticated caller
may write, replace or delete only objects under a folder named after their
own identity (`<caller id>/...`). Every other bucket is closed.
"""

from pathlib import Path, PurePosixPath

from campus_portal.core.config import settings
from campus_portal.core.errors import Forbidden, NotFound, ValidationError
from campus_portal.utils.logging import get_logger

logger = get_logger(__name__)

IMAGES_BUCKET = "app-images"
PUBLIC_READ_BUCKETS = {IMAGES_BUCKET}
OWNER_WRITE_BUCKETS = {IMAGES_BUCKET}


def split_object_path(object_path: str) -> list[str]:
    parts = object_path.split("/")
    if not object_path or any(p in ("", ".", "..") for p in parts):
        raise ValidationError()
    return parts


def can_read(bucket: str) -> bool:
    return bucket in PUBLIC_READ_BUCKETS


def can_modify(caller_id: str, bucket: str, object_path: str) -> bool:
    if bucket not in OWNER_WRITE_BUCKETS:
        return False
    parts = split_object_path(object_path)
    # A bare file at the bucket root has no owner folder.
    return len(parts) > 1 and parts[0] == caller_id


class LocalObjectStore:
    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path(self, bucket: str, object_path: str) -> Path:
        return self.root.joinpath(bucket, *PurePosixPath(object_path).parts)

    def put(self, caller_id: str, bucket: str, object_path: str, data: bytes) -> None:
        if not can_modify(caller_id, bucket, object_path):
            logger.warning("Denied write of %s/%s by %s", bucket, object_path, caller_id)
            raise Forbidden()
        path = self._path(bucket, object_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def delete(self, caller_id: str, bucket: str, object_path: str) -> None:
        if not can_modify(caller_id, bucket, object_path):
            logger.warning("Denied delete of %s/%s by %s", bucket, object_path, caller_id)
            raise Forbidden()
        path = self._path(bucket, object_path)
        if not path.is_file():
            raise NotFound()
        path.unlink()

    def get(self, bucket: str, object_path: str) -> bytes:
        if not can_read(bucket):
            raise Forbidden()
        split_object_path(object_path)
        path = self._path(bucket, object_path)
        if not path.is_file():
            raise NotFound()
        return path.read_bytes()


def get_object_store() -> LocalObjectStore:
    return LocalObjectStore(settings.storage_root)
