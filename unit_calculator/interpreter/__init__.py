"""Interpreter module."""

from .interpreter import Evaluation, Interpreter, evaluate

__all__ = ["Evaluation", "Interpreter", "evaluate"]
