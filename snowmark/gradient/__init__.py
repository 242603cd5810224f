"""Linear gradients and their parser."""

from .lib import GRADIENT_RULES, MAX_STOPS, Gradient, GradientParser, Stop, parse_gradient

__all__ = [
    "MAX_STOPS",
    "GRADIENT_RULES",
    "Gradient",
    "GradientParser",
    "Stop",
    "parse_gradient",
]
