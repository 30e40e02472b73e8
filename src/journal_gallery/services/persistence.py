"""Conversion of backend errors into typed storage failures."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from journal_gallery.domain.errors import GalleryError, StorageFailure

_logger = logging.getLogger(__name__)


@contextmanager
def storage_call(action: str) -> Iterator[None]:
    """Re-raise backend exceptions as ``StorageFailure`` for ``action``."""
    try:
        yield
    except GalleryError:
        raise
    except Exception as exc:
        _logger.exception("Storage call failed: action=%s", action)
        raise StorageFailure(action, str(exc)) from exc
