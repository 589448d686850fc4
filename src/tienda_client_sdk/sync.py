from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from .clients.base import invalid_listing
from .exceptions import ApiError
from .filters import FilterState
from .normalizers import normalize_rows
from .statistics import CollectionStats
from .store import CollectionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
Fetcher = Callable[[], Any]


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data_available": self.data_available,
        }


@dataclass(frozen=True)
class SyncSnapshot:
    entity: str
    state: LoadState
    visible: tuple[BaseModel, ...]
    full_stats: CollectionStats
    visible_stats: CollectionStats
    error: ApiError | None = None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None


Listener = Callable[[SyncSnapshot], None]


class SyncCoordinator:
    """Runs fetch-all → normalize → filter → aggregate cycles for one entity.

    Writes never touch the store directly: an acknowledged write triggers a
    full reload, which is the only way other groups' changes to the shared
    backend become visible too.
    """

    def __init__(self, store: CollectionStore, fetch_all: Fetcher) -> None:
        self.store = store
        self._fetch_all = fetch_all
        self._state = LoadState.IDLE
        self._last_error: ApiError | None = None
        self._stats = store.statistics("full")
        self._listeners: list[Listener] = []

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def last_error(self) -> ApiError | None:
        return self._last_error

    @property
    def statistics(self) -> CollectionStats:
        return self._stats

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reload(self) -> LoadState:
        entity = self.store.profile.name
        profile = self.store.profile
        self._transition(LoadState.LOADING)
        logger.info("sync_reload_start", extra={"entity": entity})
        try:
            payload = self._fetch_all()
            try:
                rows = normalize_rows(payload, strict=True)
            except ValueError as exc:
                raise invalid_listing(payload) from exc
            # Normalize and aggregate before committing so the store is only
            # touched once the whole cycle has succeeded.
            records = tuple(profile.normalizer(row) for row in rows)
            stats = profile.aggregator(records)
        except ApiError as exc:
            self._last_error = exc
            logger.warning(
                "sync_reload_failed",
                extra={"entity": entity, "code": exc.code, "status_code": exc.status_code},
            )
            self._transition(LoadState.LOAD_FAILED)
            return self._state
        except Exception:
            logger.exception("sync_reload_crashed", extra={"entity": entity})
            self._transition(LoadState.LOAD_FAILED)
            raise

        self.store.replace_all(records)
        self._stats = stats
        self._last_error = None
        logger.info("sync_reload_success", extra={"entity": entity, "count": stats.total})
        self._transition(LoadState.LOADED)
        return self._state

    def submit(self, write: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a gateway write and reload on acknowledgement.

        A rejected write propagates unchanged and leaves the store and state
        as they were.
        """
        entity = self.store.profile.name
        operation = getattr(write, "__name__", "write")
        try:
            result = write(*args, **kwargs)
        except ApiError as exc:
            logger.warning(
                "sync_write_rejected",
                extra={"entity": entity, "operation": operation, "code": exc.code},
            )
            raise
        logger.info("sync_write_acknowledged", extra={"entity": entity, "operation": operation})
        self.reload()
        return result

    def refilter(self, state: FilterState) -> tuple[BaseModel, ...]:
        visible = self.store.apply_filters(state)
        self._notify()
        return visible

    def snapshot(self) -> SyncSnapshot:
        return SyncSnapshot(
            entity=self.store.profile.name,
            state=self._state,
            visible=self.store.visible,
            full_stats=self._stats,
            visible_stats=self.store.statistics("visible"),
            error=self._last_error,
        )

    def view_state(self) -> ViewState:
        return resolve_view_state(
            state=self._state,
            error=self._last_error.message if self._last_error else None,
            has_data=bool(self.store.full),
        )

    def _transition(self, state: LoadState) -> None:
        self._state = state
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            # A failing listener must not stop the state machine mid-transition.
            try:
                listener(snapshot)
            except Exception:
                logger.exception(
                    "sync_listener_failed",
                    extra={"entity": snapshot.entity, "state": snapshot.state.value},
                )


def resolve_view_state(*, state: LoadState, error: str | None, has_data: bool) -> ViewState:
    if state is LoadState.LOADING:
        return ViewState(ViewStateStatus.LOADING, "Cargando datos...", data_available=has_data)
    if state is LoadState.LOAD_FAILED and has_data:
        return ViewState(ViewStateStatus.PARTIAL_ERROR, error, data_available=True)
    if state is LoadState.LOAD_FAILED:
        return ViewState(ViewStateStatus.FATAL_ERROR, error)
    if not has_data:
        return ViewState(ViewStateStatus.EMPTY, "No se encontraron registros")
    return ViewState(ViewStateStatus.SUCCESS, "Listo", data_available=True)

