from collections.abc import Mapping
from typing import Any, TypeVar

from databases import Database
from pydantic import BaseModel

from pickem.utils.errors import translate_store_errors

BaseModelT = TypeVar("BaseModelT", bound=BaseModel)


async def fetch_one_parsed(
    database: Database,
    model: type[BaseModelT],
    query: str,
    values: Mapping[str, Any] | None = None,
) -> BaseModelT | None:
    with translate_store_errors():
        record = await database.fetch_one(query=query, values=values)

    return model.model_validate(dict(record._mapping)) if record is not None else None


async def fetch_all_parsed(
    database: Database,
    model: type[BaseModelT],
    query: str,
    values: Mapping[str, Any] | None = None,
) -> list[BaseModelT]:
    with translate_store_errors():
        records = await database.fetch_all(query=query, values=values)

    return [model.model_validate(dict(record._mapping)) for record in records]


async def fetch_column(
    database: Database,
    column: str,
    query: str,
    values: Mapping[str, Any] | None = None,
) -> list[Any]:
    with translate_store_errors():
        records = await database.fetch_all(query=query, values=values)

    return [record._mapping[column] for record in records]


async def fetch_count(database: Database, query: str, values: Mapping[str, Any] | None = None) -> int:
    with translate_store_errors():
        result = await database.fetch_val(query=query, values=values)

    return int(result or 0)
