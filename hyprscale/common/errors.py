"""Exception hierarchy for hyprscale"""


class HyprscaleError(Exception):
    """Base class for all hyprscale errors"""


class ToolUnavailableError(HyprscaleError):
    """External display tool is missing, failed, or timed out.

    Raised by detection strategies as a skip signal; the detector moves on
    to the next strategy instead of surfacing it to the user.
    """

    def __init__(self, tool: str, reason: str) -> None:
        super().__init__(f"{tool}: {reason}")
        self.tool: str = tool
        self.reason: str = reason


class ApplyRejectedError(HyprscaleError):
    """Compositor or environment rejected a scaling change"""


class ConfigError(HyprscaleError):
    """Settings file is present but invalid"""
