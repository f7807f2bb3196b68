"""Base interfaces for zero-shot classifier providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class ClassifierError(RuntimeError):
    """Raised when a provider answers outside its protocol."""


class ClassificationRequest(BaseModel):
    sequence: str
    candidate_labels: List[str]
    hypothesis_template: str = "This example is {}."
    multi_label: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class ClassificationResult(BaseModel):
    labels: List[str] = Field(default_factory=list)
    scores: List[float] = Field(default_factory=list)
    sequence: Optional[str] = None

    @model_validator(mode="after")
    def check_lengths(self) -> "ClassificationResult":
        if len(self.labels) != len(self.scores):
            raise ValueError(
                f"labels and scores differ in length: {len(self.labels)} != {len(self.scores)}"
            )
        return self

    @property
    def is_empty(self) -> bool:
        return not self.labels

    @property
    def top_label(self) -> Optional[str]:
        return self.labels[0] if self.labels else None

    def ranked(self) -> List[Tuple[str, float]]:
        return list(zip(self.labels, self.scores))


class ClassifierClient(ABC):
    @abstractmethod
    async def aclassify(self, request: ClassificationRequest) -> ClassificationResult:
        ...

    async def aclose(self) -> None:
        return None
