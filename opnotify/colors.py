"""Severity color tokens for each backend's rendering surface."""

from typing import Union

from opnotify.models import BackendVariant, LoggingLevel, StatusColor

DEFAULT_COLOR: StatusColor = "#c8c8c8"

# variant -> (info, warn, anything else)
_COLOR_TABLE: dict[BackendVariant, tuple[StatusColor, StatusColor, StatusColor]] = {
    BackendVariant.SLACK: ("#439FE0", "danger", "#c8c8c8"),
    BackendVariant.TEAMS: ("439FE0", "E81123", "C8C8C8"),
    BackendVariant.MAILGUN: ("blue", "red", "gray"),
}


def status_color(level: Union[LoggingLevel, str], variant: BackendVariant) -> StatusColor:
    """
    Map a logging level to the color token the variant's backend expects.

    Slack takes hex with a leading hash (or a named attachment color),
    Teams takes bare hex, email takes a CSS color name.
    """
    colors = _COLOR_TABLE.get(variant)
    if colors is None:
        return DEFAULT_COLOR

    info, warn, neutral = colors
    if level == LoggingLevel.INFO:
        return info
    if level == LoggingLevel.WARN:
        return warn
    return neutral
