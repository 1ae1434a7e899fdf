"""
Ordered data-provider fallback.

Each provider is tried in sequence; the first one returning a non-empty
result wins. A provider that raises counts as empty and the next one is
tried. Sources are never merged.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SourceProvider(Generic[T]):
    """A named strategy returning rows from one data source."""
    name: str
    fetch: Callable[[], List[T]]


@dataclass(frozen=True)
class SourceResult(Generic[T]):
    """Rows from the winning provider (None when every provider came back empty)."""
    source: Optional[str]
    rows: List[T]

    @property
    def is_empty(self) -> bool:
        return not self.rows


def first_populated(
    providers: Sequence[SourceProvider[T]],
    on_failure: Optional[Callable[[], None]] = None,
) -> SourceResult[T]:
    """
    Return the result of the first provider yielding at least one row.

    Args:
        providers: Providers in precedence order
        on_failure: Called after a provider raises, e.g. to roll back a session

    Returns:
        SourceResult naming the provider used, or an empty result
    """
    for provider in providers:
        try:
            rows = list(provider.fetch() or [])
        except Exception:
            logger.warning("Source %s unavailable, trying next", provider.name, exc_info=True)
            if on_failure is not None:
                on_failure()
            continue

        if rows:
            logger.debug("Source %s returned %d rows", provider.name, len(rows))
            return SourceResult(source=provider.name, rows=rows)

        logger.debug("Source %s returned no rows", provider.name)

    return SourceResult(source=None, rows=[])
