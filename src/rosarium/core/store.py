"""In-memory record store: the single source of truth for all varieties."""

from collections.abc import Callable, Iterable, Iterator

from loguru import logger

from rosarium.exceptions import VarietyNotFoundError
from rosarium.models.variety import Variety

Listener = Callable[[tuple[Variety, ...]], None]


class RecordStore:
    """Ordered collection of varieties with pure transitions.

    Every transition swaps in a new tuple and notifies subscribers with it.
    Varieties are immutable, so a snapshot handed to a listener never changes
    under it.
    """

    def __init__(self, varieties: Iterable[Variety] = ()) -> None:
        self._varieties: tuple[Variety, ...] = tuple(varieties)
        self._listeners: list[Listener] = []

    @property
    def varieties(self) -> tuple[Variety, ...]:
        return self._varieties

    def __len__(self) -> int:
        return len(self._varieties)

    def __iter__(self) -> Iterator[Variety]:
        return iter(self._varieties)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, varieties: tuple[Variety, ...]) -> None:
        self._varieties = varieties
        for listener in list(self._listeners):
            listener(varieties)

    def find(self, variety_id: str) -> Variety | None:
        for variety in self._varieties:
            if variety.id == variety_id:
                return variety
        return None

    def get(self, variety_id: str) -> Variety:
        """Like find(), but raise VarietyNotFoundError instead of returning None."""
        variety = self.find(variety_id)
        if variety is None:
            raise VarietyNotFoundError(variety_id)
        return variety

    def add(self, variety: Variety) -> None:
        """Prepend a new variety."""
        logger.debug("Adding variety {} ({})", variety.name, variety.id)
        self._commit((variety, *self._varieties))

    def update(self, variety: Variety) -> None:
        """Replace the variety with the same id.

        Raises:
            VarietyNotFoundError: No variety has that id.
        """
        if self.find(variety.id) is None:
            raise VarietyNotFoundError(variety.id)
        self._commit(tuple(variety if v.id == variety.id else v for v in self._varieties))

    def remove(self, variety_id: str) -> None:
        """Drop a variety. Callers are responsible for confirming first."""
        if self.find(variety_id) is None:
            raise VarietyNotFoundError(variety_id)
        logger.debug("Removing variety {}", variety_id)
        self._commit(tuple(v for v in self._varieties if v.id != variety_id))

    def replace_all(self, varieties: Iterable[Variety]) -> None:
        self._commit(tuple(varieties))
