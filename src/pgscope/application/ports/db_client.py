"""Database client port - one live session per request."""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

ConnectionOptions = str | Mapping[str, Any]


class DbClient(Protocol):
    """Port for a single database connection handle."""

    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def ping(self) -> None: ...


DbClientFactory = Callable[[ConnectionOptions], DbClient]
