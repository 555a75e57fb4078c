import os
from urllib.parse import quote

from app import config
from app.helpers.errors import ConflictError, NotFoundError, StoreError

DUPLICATE_MESSAGE = "File already exists. Contact your teacher for resubmission."


def _key_part(value: str) -> str:
    # no "/" and no "_" survive, so the "_" separators below stay unambiguous
    return quote(value, safe="").replace("_", "%5F")


def build_storage_key(student_name: str, class_name: str, section: str, filename: str) -> str:
    """
    Folder-wise storage key for a submission, distinct for every distinct tuple.
    Example:
    ("Asha", "10th", "A", "hw1.py") -> 10th/A/Asha_10th_A_hw1.py
    ("x_y", "10th", "A", "z.py")    -> 10th/A/x%5Fy_10th_A_z.py
    """
    class_part, section_part = _key_part(class_name), _key_part(section)
    storage_name = f"{_key_part(student_name)}_{class_part}_{section_part}_{_key_part(filename)}"
    return f"{class_part}/{section_part}/{storage_name}"


def build_public_url(key: str) -> str:
    return f"{config.PUBLIC_BASE_URL}/uploads/{quote(key)}"


def _ascii_only(value: str) -> str:
    return "".join(c for c in value if c.isascii() and c.isprintable() and c not in '"\\')


def content_disposition(filename: str) -> str:
    """
    Attachment header for a stored file. Non-ASCII names travel in
    `filename*`, with a plain ASCII fallback for older clients.
    """
    stem, ext = (_ascii_only(part) for part in os.path.splitext(filename))
    fallback = (stem if stem.strip(". ") else "submission") + ext
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


class LocalBlobStore:
    """Key-addressed file store rooted at the uploads directory."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def _fs_path(self, key: str) -> str:
        """
        Converts a storage key -> absolute filesystem path.
        Keys escaping the root are rejected.
        """
        path = os.path.abspath(os.path.join(self.root, key))
        if os.path.commonpath([self.root, path]) != self.root:
            raise NotFoundError(f"Invalid storage key: {key}")
        return path

    def put(self, key: str, data: bytes) -> None:
        """Exclusive create. An existing file under the key is a conflict."""
        path = self._fs_path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "xb") as f:
                f.write(data)
        except FileExistsError:
            raise ConflictError(DUPLICATE_MESSAGE)
        except OSError as e:
            raise StoreError("Upload failed. Please try again.", cause=e)

    def get(self, key: str) -> bytes:
        path = self._fs_path(key)
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            raise NotFoundError(f"File not found: {key}")
        except OSError as e:
            raise StoreError(cause=e)

    def delete(self, key: str) -> None:
        """Used only to undo a blob whose record insert failed."""
        path = self._fs_path(key)
        if os.path.exists(path):
            os.remove(path)


def get_blob_store() -> LocalBlobStore:
    return LocalBlobStore(config.UPLOADS_DIR)
