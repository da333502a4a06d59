from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Student(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="nama")  # Sent as `nama` in request bodies
    npm: Optional[str] = None   # Student ID
    bid: Optional[str] = None   # Batch ID
    fak: Optional[str] = None   # Faculty


class StudentUpdate(Student):
    id: str
