"""
Models package - Data models for the animation engine
"""

from .enums import EngineStatus, TransformAxis, RangeKind, PlayPauseIcon, LogLevel, LogCategory
from .matrix import Matrix, DecomposedTransform
from .animation import (
    TRANSFORM,
    AnimationRange,
    AnimationSpec,
    TransformEquation,
    parse_descriptor,
    parse_spec,
)
from .settings import EngineSettings
from .snapshot import EngineSnapshotDTO, ObjectSnapshotDTO

__all__ = [
    'EngineStatus',
    'TransformAxis',
    'RangeKind',
    'PlayPauseIcon',
    'LogLevel',
    'LogCategory',
    'Matrix',
    'DecomposedTransform',
    'TRANSFORM',
    'AnimationRange',
    'AnimationSpec',
    'TransformEquation',
    'parse_descriptor',
    'parse_spec',
    'EngineSettings',
    'EngineSnapshotDTO',
    'ObjectSnapshotDTO',
]
