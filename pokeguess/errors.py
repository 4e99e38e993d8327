# pokeguess/errors.py


class CacheIOError(Exception):
    """Cache row could not be read, written or decoded."""


class RemoteFetchError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FetchTimeout(RemoteFetchError):
    pass


class NotFoundInCatalog(RemoteFetchError):
    pass


class StageNotFound(Exception):
    pass


class RandomSelectionExhausted(Exception):
    pass
