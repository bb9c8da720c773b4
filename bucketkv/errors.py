"""Error types raised by the bucket and key-value services.

Each error carries the HTTP status it maps to; the application registers a
single handler that renders ``{"detail": message}`` for all of them.
"""

class BucketKVError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationError(BucketKVError):
    status_code = 400

class AuthError(BucketKVError):
    status_code = 401

class NotFoundError(BucketKVError):
    status_code = 404

class ConflictError(BucketKVError):
    status_code = 409

class StorageError(BucketKVError):
    """Infrastructure failure. The message is generic and safe to return."""

    status_code = 500

    def __init__(self, message: str = "Database error"):
        super().__init__(message)
