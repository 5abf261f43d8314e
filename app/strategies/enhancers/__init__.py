"""Concrete document enhancer implementations."""

from app.strategies.enhancers.openai import OpenAIDocumentEnhancer

__all__ = [
    "OpenAIDocumentEnhancer",
]
