"""
Small shared helpers.

Recognises the following environment variables:
    DEBUG: Verbosity of log() output. Default = 0 (silent).
"""
import os

from typing import Tuple


DEBUG_LEVEL = int(os.environ.get("DEBUG")) if "DEBUG" in os.environ else 0

Vertex = Tuple[float, float]

# Number of decimal places resolution for coordinates.
ROUND_DP = 5

# A small number for comparing things that should touch if not for floating-point error.
EPS = 1 / (10 ** ROUND_DP)


def log(text: str, level: int = 1) -> None:
    if DEBUG_LEVEL >= level:
        print(text)


def round_coord(value: Vertex, dp: int = ROUND_DP) -> Vertex:
    return (round(value[0], dp), round(value[1], dp))
