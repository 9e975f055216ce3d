"""LaTeX rendering module."""

from .renderer import format_number, prefixed_hint, render_evaluation, to_latex

__all__ = ["format_number", "prefixed_hint", "render_evaluation", "to_latex"]
