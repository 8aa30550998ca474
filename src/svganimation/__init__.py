"""
svganimation - equation-driven animation of SVG scene nodes

    from svganimation import AnimatedObject, AnimationEngine, EngineSettings

    planet = AnimatedObject(document.require_node("planet"), {
        "transform": {"rotate": lambda t: t, "translate": {"x": lambda t: 100, "y": lambda t: 0}},
    })
    engine = AnimationEngine(EngineSettings(show_interface=False))
    engine.init([planet])
    engine.play()
"""

from svganimation.errors import SvgAnimationError, ConfigurationError, RuntimeEvaluationError
from svganimation.models import (
    EngineSettings,
    EngineStatus,
    Matrix,
    DecomposedTransform,
    AnimationRange,
    AnimationSpec,
    TransformEquation,
)
from svganimation.engine import (
    AnimatedObject,
    AnimationEngine,
    AsyncioFrameScheduler,
    ManualFrameScheduler,
)
from svganimation.scene import MemoryContainer, MemoryNode, SvgDocument, SvgNode
from svganimation.interface import ControlPanel, NullInterface
from svganimation.managers import ConfigManager

__version__ = "0.1.0"

__all__ = [
    'SvgAnimationError',
    'ConfigurationError',
    'RuntimeEvaluationError',
    'EngineSettings',
    'EngineStatus',
    'Matrix',
    'DecomposedTransform',
    'AnimationRange',
    'AnimationSpec',
    'TransformEquation',
    'AnimatedObject',
    'AnimationEngine',
    'AsyncioFrameScheduler',
    'ManualFrameScheduler',
    'MemoryContainer',
    'MemoryNode',
    'SvgDocument',
    'SvgNode',
    'ControlPanel',
    'NullInterface',
    'ConfigManager',
]
