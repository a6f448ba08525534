"""
Data source routing

Holds the active data client and switches between the in-memory store
and the relational store at runtime. Listeners are notified after every
effective switch.
"""

import logging
from typing import Callable, List, Optional

from courtside.config import settings
from courtside.services.data_client import DataClient
from courtside.services.local_client import LocalDataClient, get_local_client

logger = logging.getLogger(__name__)

LOCAL = "local"
REMOTE = "remote"
OFFLINE = "offline"
DATA_SOURCES = (LOCAL, REMOTE, OFFLINE)

Listener = Callable[[str], None]


class DataSourceRouter:
    """
    Active data client holder.

    'local' and 'offline' both use the in-memory client; 'remote' uses the
    relational client and is only reachable when one is configured.
    """

    def __init__(
        self,
        local_client: LocalDataClient,
        remote_client: Optional[DataClient] = None,
        source: Optional[str] = None,
    ):
        self.local_client = local_client
        self.remote_client = remote_client
        self._listeners: List[Listener] = []

        if source is None:
            source = REMOTE if remote_client is not None else LOCAL
        if source not in DATA_SOURCES:
            raise ValueError(f"Unknown data source: {source}")
        if source == REMOTE and remote_client is None:
            logger.warning("Remote data source requested but not configured; using local data")
            source = LOCAL
        self._source = source

    @property
    def current_source(self) -> str:
        return self._source

    @property
    def current_client(self) -> DataClient:
        if self._source == REMOTE and self.remote_client is not None:
            return self.remote_client
        return self.local_client

    def is_remote_ready(self) -> bool:
        return self.remote_client is not None

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new source after each switch.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def set_data_source(self, source: str) -> str:
        """
        Switch the active data source.

        Switching to 'remote' without a configured remote client is refused
        with a warning; setting the current source again does nothing.

        Returns:
            The source that is active after the call

        Raises:
            ValueError: If the source name is unknown
        """
        if source not in DATA_SOURCES:
            raise ValueError(f"Unknown data source: {source}")

        if source == REMOTE and self.remote_client is None:
            logger.warning("Remote data source is not configured; keeping current source")
            return self._source

        if source == self._source:
            return self._source

        previous = self._source
        self._source = source
        logger.info(f"Data source switched from {previous} to {source}")

        for listener in list(self._listeners):
            listener(source)
        return self._source


# ============================================================================
# GLOBAL ROUTER INSTANCE
# ============================================================================

_router: Optional[DataSourceRouter] = None


def get_data_source_router() -> DataSourceRouter:
    """
    Get the global data source router.

    Builds the relational client only when DATABASE_URL is configured.

    Returns:
        DataSourceRouter instance
    """
    global _router

    if _router is None:
        remote_client = None
        if settings.remote_configured:
            from courtside.services.sql_client import SqlDataClient
            remote_client = SqlDataClient()
        _router = DataSourceRouter(get_local_client(), remote_client, source=settings.DATA_SOURCE)

    return _router


def get_data_client() -> DataClient:
    """FastAPI dependency returning the active data client"""
    return get_data_source_router().current_client


def reset_data_source_router() -> None:
    global _router
    _router = None
