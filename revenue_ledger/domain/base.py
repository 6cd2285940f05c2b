from uuid import uuid4
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a string UUID used as primary key"""
    return str(uuid4())


class BaseModel(SQLModel):
    """Base class for all domain entities"""
    pass
