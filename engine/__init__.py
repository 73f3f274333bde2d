"""
engine/
-------
Run & playback layer.

    from engine import AlgorithmRunner, TracePlayer
"""

from engine.runner import AlgorithmRunner
from engine.player import TracePlayer

__all__ = [
    "AlgorithmRunner",
    "TracePlayer",
]
