"""
Engine settings - Pydantic model for engine and control-panel options

Keys can be given in snake_case or in camelCase
(showInterface, interfacePosition, restartAtTheEnd, ...).
"""

from typing import Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from svganimation.errors import ConfigurationError


class EngineSettings(BaseModel):
    """Options recognized by AnimationEngine and ControlPanel"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
        json_schema_extra={
            "example": {
                "showInterface": True,
                "interfaceSize": 1.5,
                "interfaceColor": "#333",
                "interfacePosition": [40, 460],
                "restartAtTheEnd": False,
            }
        },
    )

    show_interface: bool = Field(True, description="Spawn the play/pause/refresh control panel")
    interface_animation: bool = Field(True, description="Animate control icon changes")
    interface_size: float = Field(1.0, gt=0, description="Control panel scale factor")
    interface_color: str = Field("#000", min_length=1, description="Control icon fill/stroke color")
    interface_position: Union[Literal["auto"], Tuple[float, float]] = Field(
        "auto",
        description="'auto' (bottom-left of the viewBox) or an explicit (x, y)"
    )
    restart_at_the_end: bool = Field(False, description="Refresh automatically after end()")
    fps: float = Field(60.0, gt=0, le=1000, description="Tick rate of the asyncio scheduler")
    end_settle_delay: float = Field(
        0.1,
        ge=0,
        description="Seconds ticking continues after end() so the last frame settles"
    )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineSettings":
        """
        Validate a raw settings mapping.

        Raises:
            ConfigurationError: unknown keys or invalid values
        """
        try:
            return cls.model_validate(data or {})
        except ValidationError as ex:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in ex.errors()
            )
            raise ConfigurationError.invalid_settings(reasons) from ex

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
