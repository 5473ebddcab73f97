"""
Redis Connection Pool Management.

Shared connection pool for the Redis metadata repository.

Responsibility:
    - Create one process-wide ConnectionPool (lazily, thread-safe)
    - Verify the server with PING, retrying with exponential backoff
    - Health check for the /health endpoint
    - Close the pool on application shutdown

Configuration (environment):
    - REDIS_HOST: hostname (default "localhost")
    - REDIS_PORT: port (default 6379)
    - REDIS_DB: database number (default 0)
    - REDIS_MAX_CONNECTIONS: pool size (default 10)
    - REDIS_TIMEOUT: socket and connect timeout in seconds (default 5)
    - REDIS_RETRY_ATTEMPTS: PING attempts before giving up (default 3)

Error Handling:
    - ConnectionError / TimeoutError during PING: retried (1s, 2s, 4s, ...)
    - Retries exhausted: RedisError raised to the caller
    - health_check(): never raises, returns False instead

Examples:
    >>> client = get_redis_client()
    >>> client.set("key", "value")
    >>> health_check()
    True
    >>> close_connections()
"""

import logging
import os
import threading
import time
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

logger = logging.getLogger(__name__)

# Process-wide pool, created on first use
_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()

BACKOFF_BASE_SECONDS = 1


def _create_pool(
    host: Optional[str],
    port: Optional[int],
    db: Optional[int],
    max_connections: Optional[int],
    timeout: Optional[int],
) -> ConnectionPool:
    redis_host = host or os.getenv("REDIS_HOST", "localhost")
    redis_port = port or int(os.getenv("REDIS_PORT", "6379"))
    redis_db = db if db is not None else int(os.getenv("REDIS_DB", "0"))
    max_conn = max_connections or int(os.getenv("REDIS_MAX_CONNECTIONS", "10"))
    conn_timeout = timeout or int(os.getenv("REDIS_TIMEOUT", "5"))

    logger.info(
        f"Creating Redis connection pool: host={redis_host}, port={redis_port}, "
        f"db={redis_db}, max_connections={max_conn}, timeout={conn_timeout}s"
    )
    return ConnectionPool(
        host=redis_host,
        port=redis_port,
        db=redis_db,
        max_connections=max_conn,
        socket_timeout=conn_timeout,
        socket_connect_timeout=conn_timeout,
        socket_keepalive=True,
        decode_responses=True,
    )


def _ping_with_retry(client: Redis, attempts: int) -> None:
    """
    PING the server until it answers or attempts run out.

    Raises:
        RedisError: If every attempt failed
    """
    last_error: Optional[Exception] = None

    for attempt in range(attempts):
        try:
            client.ping()
            logger.debug(f"Redis connection established (attempt {attempt + 1})")
            return
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt == attempts - 1:
                break
            delay = BACKOFF_BASE_SECONDS * (2**attempt)
            logger.warning(
                f"Redis connection failed (attempt {attempt + 1}/{attempts}): {e}. "
                f"Retrying in {delay}s..."
            )
            time.sleep(delay)

    logger.error(f"Redis connection failed after {attempts} attempts: {last_error}")
    raise RedisError(
        f"Failed to connect to Redis after {attempts} attempts. "
        f"Last error: {last_error}"
    )


def get_redis_client(
    host: Optional[str] = None,
    port: Optional[int] = None,
    db: Optional[int] = None,
    max_connections: Optional[int] = None,
    timeout: Optional[int] = None,
    verify_connection: bool = True,
) -> Redis:
    """
    Get a Redis client backed by the shared pool.

    The pool is built from the first call's arguments (or the environment);
    later calls reuse it and ignore their connection arguments. Building the
    pool opens no connection.

    Args:
        verify_connection: PING (with retries) before returning. When False
            the client is returned untested and connection errors surface
            on its first command.

    Returns:
        Redis client (decode_responses=True)

    Raises:
        RedisError: If verify_connection is set and the server is unreachable
            after REDIS_RETRY_ATTEMPTS
    """
    global _redis_pool

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                _redis_pool = _create_pool(host, port, db, max_connections, timeout)

    client = Redis(connection_pool=_redis_pool)
    if verify_connection:
        _ping_with_retry(client, int(os.getenv("REDIS_RETRY_ATTEMPTS", "3")))
    return client


def health_check(client: Optional[Redis] = None) -> bool:
    """
    Check Redis health with a single PING.

    Args:
        client: Client to test (default: pooled client from get_redis_client)

    Returns:
        True if Redis answered PING, False on any error
    """
    try:
        redis_client = client or get_redis_client(verify_connection=False)
        if redis_client.ping():
            logger.debug("Redis health check: OK")
            return True
        logger.warning("Redis health check: PING returned False")
        return False
    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


def close_connections() -> None:
    """
    Disconnect and drop the shared pool. Safe to call more than once.
    """
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            logger.debug("Redis connection pool already closed or not initialized")
            return

        logger.info("Closing Redis connection pool")
        try:
            _redis_pool.disconnect()
        except RedisError as e:
            logger.error(f"Error closing Redis connection pool: {e}")
        finally:
            _redis_pool = None
