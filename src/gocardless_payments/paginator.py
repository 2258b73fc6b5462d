import logging
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Iterator, Optional

from .descriptor import RequestDescriptor
from .errors import InvalidRequestError

if TYPE_CHECKING:
    from .client import GoCardlessClient

logger = logging.getLogger(__name__)

__all__ = ["Paginator"]


class Paginator(Iterator[Any]):
    """Lazily walks every page of a list endpoint, following ``after`` cursors.

    No request is made until the first item is requested, and a new page is
    fetched only once the buffered one is exhausted. Items are yielded in the
    order the server returns them. The walk is forward-only: once it ends,
    or once fetching a page raises, the paginator stays exhausted.

    ``cursor`` holds the ``after`` cursor of the last page fetched
    successfully, which can be used to start a fresh walk from that point.
    """

    def __init__(self, client: "GoCardlessClient", descriptor: RequestDescriptor):
        if not descriptor.paginated:
            raise InvalidRequestError(f"{descriptor.path_template} is not a list endpoint")
        self._client = client
        self._descriptor = descriptor
        self._items: Deque[Any] = deque()
        self._started = False
        self._finished = False
        self.cursor: Optional[str] = None
        self.pages_fetched = 0

    def __iter__(self) -> "Paginator":
        return self

    def __next__(self) -> Any:
        while not self._items:
            if self._finished:
                raise StopIteration
            self._load_page()
        return self._items.popleft()

    def _load_page(self) -> None:
        if self._started:
            descriptor = self._descriptor.with_cursor(self.cursor)
        else:
            descriptor = self._descriptor
        self._started = True

        try:
            page = self._client.execute(descriptor)
        except Exception:
            self._finished = True
            logger.debug(
                "Stopped walking %s after %d page(s) at cursor %s",
                self._descriptor.path_template,
                self.pages_fetched,
                self.cursor,
            )
            raise

        self.pages_fetched += 1
        self._items.extend(page.items)
        self.cursor = page.after
        if not page.after:
            self._finished = True
        logger.debug(
            "Fetched page %d of %s (%d items, after=%s)",
            self.pages_fetched,
            self._descriptor.path_template,
            len(page.items),
            page.after,
        )
