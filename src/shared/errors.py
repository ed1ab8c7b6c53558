"""Error kinds shared by every bounded context.

Domain code raises the leaf kinds below (or protean's ``ValidationError``)
and lets them propagate. Operations add context to a propagating error with
:func:`annotate`, which records a note on the exception instead of wrapping
it, so the HTTP layer can still classify it by type.
"""

from collections.abc import Iterator
from contextlib import contextmanager


class EbookStoreError(Exception):
    """Base class for domain errors with a client-facing message."""

    message = "Some unexpected error happened"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EntityNotFound(EbookStoreError):
    def __init__(self, entity: str, message: str | None = None) -> None:
        self.entity = entity
        super().__init__(message or f"the provided {entity} was not found")


class DuplicateKey(EbookStoreError):
    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"the provided {key} is already being used")


class Forbidden(EbookStoreError):
    message = "the access to this action is restricted to allowed users"


class Unauthorized(EbookStoreError):
    message = "the provided credentials are not valid"


class PaymentRequired(EbookStoreError):
    message = "payment is required to access this resource"


@contextmanager
def annotate(note: str) -> Iterator[None]:
    """Attach ``note`` to any exception escaping the block.

    Usage::

        with annotate(f"(FindBookByID) failed finding book {book_id}"):
            book = repository.find_by_id(book_id)
    """
    try:
        yield
    except Exception as exc:
        exc.add_note(note)
        raise


def error_details(exc: BaseException) -> list[str]:
    """Leaf message followed by the notes added on the way up, innermost first."""
    return [str(exc), *getattr(exc, "__notes__", [])]
