"""Resilient acquisition of generated quiz and learning path content."""

__version__ = "1.0.0"

from .service import acquire_learning_path, acquire_quiz  # noqa: E402

__all__ = ["acquire_learning_path", "acquire_quiz", "__version__"]
