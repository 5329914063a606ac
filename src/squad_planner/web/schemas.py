from typing import Union

from pydantic import BaseModel, Field


class PlaceRequest(BaseModel):
    session_id: str
    date: str
    from_: str = Field(alias="from")
    to: str = ""
    squad: Union[str, int]


class StageRequest(BaseModel):
    session_id: str
