"""Error types raised at the edges of the slider.

The core itself (windowing, styling, the state machine) never raises for
well-formed input: guards are silent no-ops and degenerate inputs degrade to
empty output. Errors only surface where outside data enters the system:
configuration read from the environment and gesture payloads from a host.

Example:
    from carousel_slider.core.errors import ConfigurationError, InvalidGestureError

    try:
        physics = PhysicsConstants.from_env()
    except ConfigurationError as ex:
        logger.error("bad_slider_config", setting=ex.setting, error=str(ex))
        raise
"""

from __future__ import annotations


class SliderError(Exception):
    """Base class for all slider errors.

    Attributes:
        original_error: The underlying exception, if this error wraps one.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error

    @classmethod
    def from_exception(cls, ex: Exception) -> SliderError:
        """Create an error of this type from an existing exception."""
        return cls(message=str(ex), original_error=ex)


class ConfigurationError(SliderError):
    """Invalid slider configuration.

    Attributes:
        setting: Name of the offending setting or environment variable.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error=original_error)
        self.setting = setting


class InvalidGestureError(SliderError):
    """A gesture payload could not be turned into a slider event."""
