import json
from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseModelORM(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def parse_json_column(value: Any) -> Any:
    """The database driver hands back JSON columns of raw text queries as strings."""
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value
