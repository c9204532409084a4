"""
Paginated list iteration

ListIterator walks a remote collection one item at a time, fetching pages
on demand through a caller-supplied fetch function. The fetch function
receives the current query body and returns ``(items, ListMeta)``; any
exception it raises is passed through to the caller unchanged.

Pagination is offset based: after every non-empty page the ``offset``
filter grows by the number of items in that page.
"""

import logging
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from chargekit.models import ListMeta
from chargekit.params import Filters, ListParams, QueryBody

logger = logging.getLogger("chargekit.iter")

T = TypeVar("T")

Fetch = Callable[[QueryBody], Tuple[Sequence[T], ListMeta]]

OFFSET_KEY = "offset"
OFFSET_OP = ""


class ListIterator(Generic[T]):
    """
    Lazy iterator over a paginated list endpoint

    Pages are fetched synchronously from ``has_more()`` or ``advance()``
    when the current page is drained, so either call may block on I/O. Iteration stops for good once a page
    comes back empty, the page metadata reports no further pages, the
    single page of a ``single`` listing is drained, or a fetch raises.

    Example:
        >>> it = client.charges.list(ChargeListParams())
        >>> while it.has_more():
        ...     charge = it.advance()

        or simply

        >>> for charge in client.charges.list():
        ...     print(charge.id)
    """

    def __init__(
        self,
        params: Optional[ListParams],
        body: Optional[QueryBody],
        fetch: Fetch,
    ):
        """
        Args:
            params: List parameters; filters are copied, never mutated
            body: Initial query body, already carrying the encoded params
            fetch: Page fetch function
        """
        self.filters: Filters = params.filters.copy() if params is not None else Filters()
        self.single: bool = params.single if params is not None else False
        self.err: Optional[BaseException] = None

        self._body: QueryBody = list(body or [])
        self._fetch = fetch
        self._values: List[T] = []
        self._pos = 0
        self._meta: Optional[ListMeta] = None
        self._fetched = False
        self._done = False
        self._pending: Optional[BaseException] = None

        value = self.filters.get(OFFSET_KEY, OFFSET_OP)
        try:
            self._offset = int(value) if value else 0
        except ValueError:
            raise ValueError(f"{OFFSET_KEY} filter must be an integer, got {value!r}") from None
        if self._offset < 0:
            raise ValueError(f"{OFFSET_KEY} filter must not be negative, got {value!r}")

    @property
    def offset(self) -> int:
        return self._offset

    def has_more(self) -> bool:
        """
        Report whether another ``advance()`` can produce an item or an error

        Blocks on a page fetch when the current page is drained and more
        pages may exist. A fetch error raised here is held back and raised
        from the following ``advance()``.
        """
        if self._pos < len(self._values) or self._pending is not None:
            return True
        if self._done:
            return False

        try:
            return self._next_page()
        except Exception as exc:
            self._pending = exc
            return True

    def advance(self) -> T:
        """
        Return the next item, fetching a page first if the buffer is drained

        Raises:
            StopIteration: At end of stream
            Exception: Whatever the fetch function raised, exactly once
        """
        if self._pending is not None:
            exc, self._pending = self._pending, None
            raise exc

        if self._pos >= len(self._values) and not self._next_page():
            raise StopIteration

        item = self._values[self._pos]
        self._pos += 1
        return item

    def current_metadata(self) -> Optional[ListMeta]:
        """Metadata of the most recently fetched page, None before the first fetch"""
        return self._meta

    def __iter__(self) -> "ListIterator[T]":
        return self

    def __next__(self) -> T:
        return self.advance()

    def _next_page(self) -> bool:
        if self._done:
            return False
        if self._fetched and (self.single or self._meta is None or not self._meta.has_more):
            self._done = True
            return False

        logger.debug("Fetching page at offset %d", self.offset)

        try:
            values, meta = self._fetch(list(self._body))
        except Exception as exc:
            logger.warning("List page fetch failed at offset %d: %s", self.offset, exc)
            self._done = True
            self.err = exc
            raise

        self._fetched = True
        self._meta = meta
        self._values = list(values)
        self._pos = 0

        if not self._values:
            self._done = True
            return False

        self._advance_offset(len(self._values))
        return True

    def _advance_offset(self, count: int) -> None:
        offset = self._offset + count
        self._offset = offset
        self.filters.set_filter(OFFSET_KEY, OFFSET_OP, offset)

        param = f"{OFFSET_KEY}[{OFFSET_OP}]" if OFFSET_OP else OFFSET_KEY
        self._body = [(k, v) for k, v in self._body if k != param]
        self._body.append((param, str(offset)))
