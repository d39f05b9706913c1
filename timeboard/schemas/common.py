import datetime as dt
import math
import uuid
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel

from timeboard.clock import as_utc

T = TypeVar("T")

class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int
    total_pages: int

def page_of(items: list[T], total: int, page: int, limit: int) -> dict:
    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }

class Ref(BaseModel):
    id: uuid.UUID
    name: str

class ProjectRef(BaseModel):
    id: uuid.UUID
    name: str
    code: str

class TaskRef(BaseModel):
    id: uuid.UUID
    title: str

# timestamps always leave the api with an explicit UTC offset
UtcDatetime = Annotated[dt.datetime, AfterValidator(as_utc)]
