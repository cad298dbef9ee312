"""Small async helpers around the session for common row operations."""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import delete, update
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


async def get_by_id(session: AsyncSession, model: type[ModelT], obj_id: Any) -> ModelT | None:
    if obj_id is None:
        return None
    return await session.get(model, obj_id)


async def save(session: AsyncSession, obj: ModelT, *, commit: bool = True) -> ModelT:
    session.add(obj)
    if commit:
        await session.commit()
        await session.refresh(obj)
    else:
        await session.flush()
    return obj


async def create(session: AsyncSession, model: type[ModelT], **data: Any) -> ModelT:
    obj = model(**data)
    return await save(session, obj)


async def update_where(
    session: AsyncSession,
    model: type[SQLModel],
    *conditions: Any,
    values: dict[str, Any],
) -> None:
    await session.execute(update(model).where(*conditions).values(**values))


async def delete_where(session: AsyncSession, model: type[SQLModel], *conditions: Any) -> int:
    result = await session.execute(delete(model).where(*conditions))
    return result.rowcount or 0
