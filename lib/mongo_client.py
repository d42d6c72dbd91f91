# =============================================================================
# lib/mongo_client.py - MongoDB Connection Provider
# =============================================================================
# This module owns the lifecycle of the process-wide MongoDB client:
#   connect()  - build the pooled client and prove it with a ping
#   acquire()  - hand a database handle to one request (connects lazily)
#   release()  - give the handle back (the driver pool does the real work)
#   close()    - shut the client down on application shutdown
#
# The provider is constructed explicitly in app/main.py and stored on
# app.state; handlers receive it through app/dependencies.py.
#
# Usage:
#   provider = MongoProvider.from_settings(settings)
#   await provider.connect()
#   db = await provider.acquire()
#   docs = await db["companies"].find({}).to_list(None)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from app.config import Settings
from app.exceptions import DatabaseConnectionError

# Set up logging for this module
logger = logging.getLogger(__name__)

SRV_SCHEME = "mongodb+srv://"
STANDARD_SCHEME = "mongodb://"
DEFAULT_PORT = 27017


def to_direct_uri(uri: str) -> str:
    """
    Rewrite a cluster-style SRV URI into a direct single-host URI.

    Local resolvers often cannot answer the SRV/TXT lookups mongodb+srv://
    needs. The rewritten URI connects straight to the named host instead,
    keeping TLS on (SRV implies it).

    Example:
        to_direct_uri("mongodb+srv://u:p@cluster0.abc.mongodb.net/db?retryWrites=true")
        # "mongodb://u:p@cluster0.abc.mongodb.net:27017/db?retryWrites=true&directConnection=true&tls=true"

    Non-SRV URIs are returned unchanged.
    """
    if not uri.startswith(SRV_SCHEME):
        return uri

    remainder = uri[len(SRV_SCHEME):]
    query = ""
    if "?" in remainder:
        remainder, query = remainder.split("?", 1)

    netloc, slash, path = remainder.partition("/")
    userinfo, at, host = netloc.rpartition("@")
    if ":" not in host:
        host = f"{host}:{DEFAULT_PORT}"

    params = [p for p in query.split("&") if p]
    keys = {p.split("=", 1)[0].lower() for p in params}
    if "directconnection" not in keys:
        params.append("directConnection=true")
    if "tls" not in keys and "ssl" not in keys:
        params.append("tls=true")

    rebuilt = f"{STANDARD_SCHEME}{userinfo}{at}{host}{slash}{path}"
    return f"{rebuilt}?{'&'.join(params)}"


class MongoProvider:
    """
    Connection provider for the portfolio database.

    One pooled AsyncMongoClient is shared by every request for the life of
    the process. All driver failures on the connection path surface as
    DatabaseConnectionError.
    """

    def __init__(
        self,
        uri: str | None,
        database_name: str,
        connect_timeout_ms: int = 5000,
        ping_timeout: float = 2.0,
        max_pool_size: int = 10,
        direct_connection: bool = False,
        client_factory: Any = AsyncMongoClient,
    ):
        self._uri = uri
        self._database_name = database_name
        self._connect_timeout_ms = connect_timeout_ms
        self._ping_timeout = ping_timeout
        self._max_pool_size = max_pool_size
        self._direct_connection = direct_connection
        self._client_factory = client_factory
        self._client: Any = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> MongoProvider:
        return cls(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
            connect_timeout_ms=settings.MONGODB_CONNECT_TIMEOUT_MS,
            ping_timeout=settings.MONGODB_PING_TIMEOUT_SECONDS,
            max_pool_size=settings.MONGODB_MAX_POOL_SIZE,
            direct_connection=settings.is_development and settings.MONGODB_DIRECT_CONNECTION,
        )

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def _effective_uri(self) -> str:
        if not self._uri:
            raise DatabaseConnectionError("MONGODB_URI environment variable is not set")
        if self._direct_connection:
            return to_direct_uri(self._uri)
        return self._uri

    async def _ping(self, client: Any) -> None:
        await asyncio.wait_for(client.admin.command("ping"), timeout=self._ping_timeout)

    async def _discard(self, client: Any) -> None:
        try:
            await client.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing MongoDB client: {e}")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        """
        Create the client and verify it with a ping.

        Raises:
            DatabaseConnectionError: If the URI is unset, the handshake exceeds
                its timeout, or the ping fails
        """
        async with self._lock:
            if self._client is not None:
                return

            uri = self._effective_uri()
            client = None
            try:
                client = self._client_factory(
                    uri,
                    serverSelectionTimeoutMS=self._connect_timeout_ms,
                    connectTimeoutMS=self._connect_timeout_ms,
                    maxPoolSize=self._max_pool_size,
                    minPoolSize=1,
                    maxIdleTimeMS=30000,
                    retryWrites=True,
                    retryReads=True,
                )
                await self._ping(client)
            except (PyMongoError, asyncio.TimeoutError, OSError) as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                if client is not None:
                    await self._discard(client)
                raise DatabaseConnectionError(f"Could not reach MongoDB: {type(e).__name__}")

            self._client = client
            logger.info(f"Connected to MongoDB database '{self._database_name}'")

    async def acquire(self) -> Any:
        """
        Get a database handle for the current request.

        Connects lazily. A connected client is handed out as-is: the driver's
        pool handles server selection and reconnects, and other requests may
        be mid-query on it, so it is never torn down here.

        Returns:
            AsyncDatabase for the configured database name

        Raises:
            DatabaseConnectionError: If no connection has been made and one
                cannot be made now
        """
        if self._client is None:
            await self.connect()

        return self._client[self._database_name]

    def release(self, db: Any) -> None:
        """
        Return a handle obtained from acquire().

        Handles share the pooled client, so nothing is closed here.
        """
        logger.debug(f"Released handle for database '{getattr(db, 'name', self._database_name)}'")

    async def ping(self) -> bool:
        """Liveness probe. Never raises."""
        if self._client is None:
            return False
        try:
            await self._ping(self._client)
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close the client. Safe to call more than once."""
        client, self._client = self._client, None
        if client is not None:
            await self._discard(client)
            logger.info("MongoDB connection closed")
