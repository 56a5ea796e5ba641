# schemas/common.py
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Largest value of the INTEGER primary keys
MAX_RECORD_ID = 2**31 - 1

# Record ids in request bodies and in the URL path
RecordId = Annotated[int, Field(gt=0, le=MAX_RECORD_ID)]
PathId = Annotated[int, Path(gt=0, le=MAX_RECORD_ID)]


class CamelModel(BaseModel):
     """Wire models use camelCase names; Python code uses snake_case."""

     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
     )


class MessageResponse(CamelModel):
     message: str
