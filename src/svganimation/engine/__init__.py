"""
Engine package - compiles animation descriptors and drives them frame by frame
"""

from .animated_object import AnimatedObject
from .animation_engine import AnimationEngine, EngineState
from .scheduler import AsyncioFrameScheduler, ManualFrameScheduler, IFrameScheduler
from .update_list import ActiveUpdateList, UpdateHandle
from . import matrix_ops

__all__ = [
    'AnimatedObject',
    'AnimationEngine',
    'EngineState',
    'AsyncioFrameScheduler',
    'ManualFrameScheduler',
    'IFrameScheduler',
    'ActiveUpdateList',
    'UpdateHandle',
    'matrix_ops',
]
