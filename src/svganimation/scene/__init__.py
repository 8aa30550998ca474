"""
Scene package - scene-graph adapters the engine animates
"""

from .protocol import ISceneNode, ISceneContainer, IControlCanvas
from .memory import MemoryContainer, MemoryNode
from .svg import SvgDocument, SvgNode
from .transform_list import parse_transform_list

__all__ = [
    'ISceneNode',
    'ISceneContainer',
    'IControlCanvas',
    'MemoryContainer',
    'MemoryNode',
    'SvgDocument',
    'SvgNode',
    'parse_transform_list',
]
