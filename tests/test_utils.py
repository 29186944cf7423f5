"""
Test suite for package utilities: angle wrapping and validation reporting.
"""

import numpy as np
import pytest

from orrery import config, temp_config
from orrery.utils import TWO_PI, normalize_angle, normalize_degrees, validation_error


class TestValidationError:

    def test_strict_raises_value_error(self):
        assert config.STRICT_VALIDATION
        with pytest.raises(ValueError, match="bad orbit"):
            validation_error("bad orbit")

    def test_lenient_warns_and_returns(self):
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="bad orbit"):
                assert validation_error("bad orbit") is None


class TestAngleWrapping:

    @pytest.mark.parametrize("angle", [0.0, 1.0, -1.0, 7.0, -1e-18, 1000.0])
    def test_normalize_angle_range(self, angle):
        wrapped = normalize_angle(angle)
        assert 0.0 <= wrapped < TWO_PI
        assert np.isclose(np.cos(wrapped), np.cos(angle))

    def test_normalize_degrees(self):
        assert normalize_degrees(370.0) == pytest.approx(10.0)
        assert normalize_degrees(-90.0) == pytest.approx(270.0)
        assert 0.0 <= normalize_degrees(-1e-15) < 360.0
