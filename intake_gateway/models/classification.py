"""
Classification data models

Rules are frozen so the rule table cannot be mutated after import.
"""
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ResourceType(str, Enum):
    """Kind of self-service resource"""
    DOC = "doc"
    VIDEO = "video"


class Resource(BaseModel):
    """A recommended self-service resource"""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    type: ResourceType
    label: str
    url: str


class ClassificationRule(BaseModel):
    """
    One row of the classification table.

    A rule with neither keywords nor error codes is the category's fallback.
    """
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., min_length=1)
    keywords: Optional[Tuple[str, ...]] = None
    error_codes: Optional[Tuple[str, ...]] = None
    topic: str = Field(..., min_length=1)
    resources: Tuple[Resource, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return not self.keywords and not self.error_codes


class ClassificationResult(BaseModel):
    """Topic and ordered resource list chosen for a request"""
    model_config = ConfigDict(frozen=True)

    topic: str
    resources: Tuple[Resource, ...] = ()
