"""Depth input normalization.

User-entered depth is free text. It is parsed the way an HTML number
input is usually read (leading integer, trailing junk ignored) and
anything unusable becomes the minimum depth. There is no
upper clamp; large depths only produce an advisory message.
"""

import re
from typing import Optional, Tuple, Union

from .config import DepthConfig
from .navigation import FetchKey, NavigationController

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')

DepthInput = Union[str, int, None]


def parse_depth(raw: DepthInput) -> Optional[int]:
    """Parse the leading integer of raw, or None if there is none."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


class DepthController:
    """Normalizes depth input and feeds it to a NavigationController."""

    def __init__(
        self,
        navigation: Optional[NavigationController] = None,
        config: Optional[DepthConfig] = None
    ):
        self.config = config or (navigation.depth_config if navigation else DepthConfig())
        self.navigation = navigation

    @property
    def quick_presets(self) -> Tuple[int, ...]:
        return self.config.quick_presets

    def normalize(self, raw: DepthInput) -> int:
        """Turn raw input into a usable depth.

        Examples:
            normalize("7")   -> 7
            normalize("-3")  -> 1
            normalize("abc") -> 1
        """
        value = parse_depth(raw)
        if value is None or value < self.config.min_depth:
            return self.config.min_depth
        return value

    def advise(self, raw: DepthInput) -> Optional[str]:
        """Advisory text for the input box, or None when nothing to say."""
        value = parse_depth(raw)
        if value is None:
            return None
        if value < self.config.min_depth:
            return f"Minimum depth is {self.config.min_depth} level"
        if value > self.config.advisory_threshold:
            return "Large trees may take longer to load"
        return None

    def apply(self, raw: DepthInput) -> FetchKey:
        """Normalize raw and make it the navigation fetch depth.

        Raises:
            RuntimeError: If no NavigationController is attached
        """
        if self.navigation is None:
            raise RuntimeError("DepthController.apply needs a NavigationController")
        return self.navigation.apply_depth(self.normalize(raw))
