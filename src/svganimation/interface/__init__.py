"""
Interface package - optional play/pause/refresh control surface
"""

from svganimation.models.settings import EngineSettings
from svganimation.scene.protocol import ISceneContainer

from .protocol import IInterfaceCollaborator, NullInterface
from .control_panel import ControlPanel


def create_interface(settings: EngineSettings, container: ISceneContainer) -> IInterfaceCollaborator:
    """ControlPanel when show_interface is on, NullInterface otherwise"""
    if settings.show_interface:
        return ControlPanel(container, settings)
    return NullInterface()


__all__ = [
    'IInterfaceCollaborator',
    'NullInterface',
    'ControlPanel',
    'create_interface',
]
