"""Mini README: On-device storage for SurfJudge uploads.

Exports the ``LocalStore`` that owns the application-private video directory
and the handle type describing a persisted copy.
"""

from .local_store import LocalStore, StoredVideoHandle

__all__ = ["LocalStore", "StoredVideoHandle"]
