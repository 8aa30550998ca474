"""
Enums for the animation engine state machine
"""

from enum import Enum, Flag, auto


class EngineStatus(Enum):
    """
    Lifecycle status of an AnimationEngine

    NOT_STARTED: Objects registered, clock at zero, nothing ticking
    PLAYING: Ticks are scheduled and the clock advances
    PAUSED: Ticks cancelled, elapsed time frozen
    ENDED: Animation finished (all windows expired or end() called)
    """
    NOT_STARTED = auto()
    PLAYING = auto()
    PAUSED = auto()
    ENDED = auto()


class TransformAxis(Flag):
    """
    Transform components present in a transform equation.

    Combined as a bitmask to pick the matrix composition strategy.
    """
    NONE = 0
    TRANSLATE = auto()
    ROTATE = auto()
    SCALE = auto()


class RangeKind(Enum):
    """Shape of an animation spec's validity window"""
    ALWAYS = auto()      # No range: always active
    ONCE = auto()        # Scalar range: fires exactly once
    OPEN = auto()        # [start]: active from start, never expires
    CLOSED = auto()      # [start, end]: active within, then expires


class PlayPauseIcon(Enum):
    """Icon currently shown on the play/pause control"""
    PLAY = auto()
    PAUSE = auto()


class LogLevel(Enum):
    """Log levels for filtering"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Settings loading, validation
    ENGINE = auto()      # Lifecycle transitions (play/pause/refresh/end)
    ANIMATION = auto()   # Descriptor compilation, windows
    SCHEDULER = auto()   # Tick scheduling, deferred calls
    SCENE = auto()       # Scene adapters (SVG, memory)
    INTERFACE = auto()   # Control panel
    TASK = auto()        # Task registry
    SYSTEM = auto()      # CLI, startup, errors

    GENERAL = auto()     # Default general category
