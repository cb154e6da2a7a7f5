# catalog/models.py
from pydantic import BaseModel, field_validator
from typing import Optional, Dict, Any, Union


class Product(BaseModel):
    id: str
    name: str
    price: Optional[Union[int, float]] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        # numeric ids are accepted and stored as their string form
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("id", "name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
