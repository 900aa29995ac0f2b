from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Narrowed projection of an upstream object, unknown fields are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Payload(BaseModel):
    """Validated upstream object, unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    narrowed: ClassVar[type[Entity]]

    def narrow(self):
        return self.narrowed.model_validate(self.model_dump())
