from typing import List

from sqlmodel import SQLModel


class ImportRowError(SQLModel):
    row: int
    message: str


class ImportResult(SQLModel):
    message: str
    processedCount: int
    errors: List[ImportRowError]
