"""
Tests for depth input normalization.
"""

import pytest

from genealogytree import DepthConfig, DepthController, FetchKey, NavigationController
from genealogytree.depth import parse_depth


class TestNormalize:
    """normalize never fails and never goes below the minimum."""

    @pytest.mark.parametrize("raw, expected", [
        ("-3", 1),
        ("abc", 1),
        ("7", 7),
        ("0", 1),
        ("", 1),
        (None, 1),
        (" 12 ", 12),
        ("12abc", 12),
        ("2.9", 2),
        ("250", 250),
        (4, 4),
        (-1, 1),
    ])
    def test_normalize(self, raw, expected):
        assert DepthController().normalize(raw) == expected

    def test_no_upper_clamp(self):
        assert DepthController().normalize("100000") == 100000

    def test_parse_depth(self):
        assert parse_depth("+5") == 5
        assert parse_depth("x5") is None
        assert parse_depth(True) is None


class TestAdvise:
    """Advisory messages for the depth input."""

    def test_below_minimum(self):
        assert DepthController().advise("0") == "Minimum depth is 1 level"

    def test_large_depth(self):
        assert DepthController().advise("51") == "Large trees may take longer to load"
        assert DepthController().advise("50") is None

    def test_unparseable_is_silent(self):
        assert DepthController().advise("abc") is None

    def test_custom_threshold(self):
        controller = DepthController(config=DepthConfig(advisory_threshold=10))
        assert controller.advise("11") is not None

    def test_presets(self):
        assert DepthController().quick_presets == (3, 5, 10, 20, 50, 100)


class TestApply:
    """apply feeds the navigation fetch key."""

    def test_apply_changes_only_depth(self):
        nav = NavigationController()
        nav.drill_into('M002')
        controller = DepthController(nav)

        key = controller.apply("abc")

        assert key == FetchKey(depth=1, root_id='M002')
        assert [entry.id for entry in nav.history] == ['M002']

    def test_apply_without_navigation(self):
        with pytest.raises(RuntimeError):
            DepthController().apply("3")

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            DepthConfig(min_depth=0)
