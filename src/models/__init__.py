"""Zero-shot classifier providers."""

from models.base import (
    ClassificationRequest,
    ClassificationResult,
    ClassifierClient,
    ClassifierError,
)
from models.gradio_client import GradioClassifierClient
from models.huggingface_client import HuggingFaceClassifierClient
from models.registry import ClassifierRegistry

__all__ = [
    "ClassificationRequest",
    "ClassificationResult",
    "ClassifierClient",
    "ClassifierError",
    "GradioClassifierClient",
    "HuggingFaceClassifierClient",
    "ClassifierRegistry",
]
