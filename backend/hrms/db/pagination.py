from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from fastapi_pagination.bases import AbstractPage, AbstractParams
from fastapi_pagination.ext.sqlmodel import apaginate
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.sql.expression import Select, SelectOfScalar

Transformer = Callable[[Sequence[Any]], Sequence[Any] | Awaitable[Sequence[Any]]]


async def paginate(
    session: AsyncSession,
    statement: Select[Any] | SelectOfScalar[Any],
    *,
    params: AbstractParams | None = None,
    transformer: Transformer | None = None,
) -> AbstractPage[Any]:
    """Run ``statement`` as one limit/offset page of the current route's page type."""
    return await apaginate(session, statement, params=params, transformer=transformer)
