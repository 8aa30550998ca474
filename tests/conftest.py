import pytest
from unittest.mock import MagicMock

from svganimation.engine import AnimatedObject, AnimationEngine, ManualFrameScheduler
from svganimation.lifecycle import TaskRegistry
from svganimation.models import EngineSettings
from svganimation.models.enums import LogLevel
from svganimation.scene import MemoryContainer
from svganimation.utils.logger import get_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Collect log lines instead of printing them."""
    logger = get_logger()
    lines = []
    previous_level = logger.min_level
    logger.set_sink(lines.append)
    logger.min_level = LogLevel.DEBUG
    yield lines
    logger.set_sink(None)
    logger.min_level = previous_level


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def container():
    return MemoryContainer(view_box=(0, 0, 500, 400))


@pytest.fixture
def scheduler():
    return ManualFrameScheduler(frame_interval=0.25)


@pytest.fixture
def settings():
    return EngineSettings(show_interface=False, end_settle_delay=0.1)


@pytest.fixture
def interface():
    """
    Fake interface collaborator recording every hook call.
    """
    return MagicMock()


@pytest.fixture
def engine(settings, scheduler, interface):
    return AnimationEngine(settings, scheduler=scheduler, interface=interface)


@pytest.fixture
def make_object(container):
    """
    Factory: AnimatedObject over a fresh MemoryNode.
    """
    def factory(name, animation=None, **attributes):
        node = container.add_node(name, attributes)
        return AnimatedObject(node, animation)

    return factory
