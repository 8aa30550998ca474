"""
Domain errors for the animation engine

Every error carries a stable string code, a human readable message and a
details dict, so callers (CLI, control surfaces) can report them uniformly.
"""

from typing import Optional


class SvgAnimationError(Exception):
    """Base class for animation domain errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(SvgAnimationError):
    """Engine cannot be set up from the given objects, descriptors or settings"""
    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        super().__init__(code=code, message=message, details=details)

    @classmethod
    def no_objects(cls) -> "ConfigurationError":
        return cls("NO_OBJECTS", "No objects were given to the animation engine")

    @classmethod
    def no_animations(cls, object_count: int) -> "ConfigurationError":
        return cls(
            "NO_ANIMATIONS",
            "None of the given objects carries an animation descriptor",
            details={"object_count": object_count}
        )

    @classmethod
    def no_container(cls, node) -> "ConfigurationError":
        return cls(
            "NO_CONTAINER",
            "First animated object is not inside a scene container",
            details={"node": repr(node)}
        )

    @classmethod
    def invalid_descriptor(cls, prop: str, reason: str) -> "ConfigurationError":
        return cls(
            "INVALID_DESCRIPTOR",
            f"Invalid animation for '{prop}': {reason}",
            details={"property": prop, "reason": reason}
        )

    @classmethod
    def invalid_settings(cls, reason: str) -> "ConfigurationError":
        return cls(
            "INVALID_SETTINGS",
            f"Invalid engine settings: {reason}",
            details={"reason": reason}
        )


class RuntimeEvaluationError(SvgAnimationError):
    """An animation equation failed while a tick was running"""
    def __init__(
        self,
        code: str,
        message: str,
        object_name: str,
        prop: str,
        time: float,
        details: Optional[dict] = None
    ):
        merged = {"object": object_name, "property": prop, "time": time}
        merged.update(details or {})
        super().__init__(code=code, message=message, details=merged)
        self.object_name = object_name
        self.prop = prop
        self.time = time

    @classmethod
    def equation_failed(cls, object_name: str, prop: str, time: float, exc: Exception) -> "RuntimeEvaluationError":
        return cls(
            "EQUATION_FAILED",
            f"Equation for '{prop}' on {object_name} raised {type(exc).__name__}: {exc}",
            object_name=object_name,
            prop=prop,
            time=time,
            details={"error_type": type(exc).__name__}
        )

    @classmethod
    def non_numeric(cls, object_name: str, prop: str, time: float, value) -> "RuntimeEvaluationError":
        return cls(
            "NON_NUMERIC_RESULT",
            f"Equation for '{prop}' on {object_name} returned non-numeric {value!r}",
            object_name=object_name,
            prop=prop,
            time=time,
            details={"value": repr(value)}
        )
