import hashlib
import os
from contextlib import contextmanager
from typing import Iterator

from filelock import FileLock

from inventory_api.config import settings


def name_lock_path(name: str) -> str:
    digest = hashlib.sha1(name.lower().encode("utf-8")).hexdigest()
    return os.path.join(settings.LOCK_DIR, f"product_name_{digest}.lock")


@contextmanager
def product_name_lock(name: str) -> Iterator[None]:
    """
    Hold a file lock for a product name (case-insensitive) while the
    uniqueness check and the write run.

    Disabled unless settings.SERIALIZE_NAME_WRITES is set. Only serializes
    writers on the same host; filelock.Timeout propagates to the caller.
    """
    if not settings.SERIALIZE_NAME_WRITES:
        yield
        return

    os.makedirs(settings.LOCK_DIR, exist_ok=True)
    lock = FileLock(name_lock_path(name))
    with lock.acquire(timeout=settings.NAME_LOCK_TIMEOUT_SECONDS):
        yield
