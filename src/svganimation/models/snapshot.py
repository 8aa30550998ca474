from dataclasses import dataclass, asdict
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from svganimation.engine.animated_object import AnimatedObject
    from svganimation.engine.animation_engine import AnimationEngine


@dataclass
class ObjectSnapshotDTO:
    name: str
    matrix: List[float]
    translate: List[float]
    scale: float
    rotate: float

    @classmethod
    def from_object(cls, obj: "AnimatedObject") -> "ObjectSnapshotDTO":
        decomposed = obj.decomposed
        return cls(
            name=obj.name,
            matrix=list(obj.matrix.as_tuple()),
            translate=list(decomposed.translate),
            scale=decomposed.scale,
            rotate=decomposed.rotate,
        )


@dataclass
class EngineSnapshotDTO:
    status: str
    elapsed: float
    active_updates: int
    objects: List[ObjectSnapshotDTO]
    last_error: Optional[str]

    @classmethod
    def from_engine(cls, engine: "AnimationEngine") -> "EngineSnapshotDTO":
        return cls(
            status=engine.status.name,
            elapsed=engine.elapsed,
            active_updates=len(engine.updates),
            objects=[ObjectSnapshotDTO.from_object(obj) for obj in engine.objects],
            last_error=str(engine.last_error) if engine.last_error else None,
        )

    def to_dict(self) -> dict:
        return asdict(self)
