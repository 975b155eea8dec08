"""Tests for the serializable StackBlurFilter."""

import json
import threading

import numpy as np
import pytest
from pydantic import ValidationError

from stackblur import FILTER_REGISTRY, BlurFilter, PixelGrid, StackBlurFilter, stack_blur


class TestStackBlurFilter:
    """Test applying the filter."""

    def test_defaults(self):
        """Default filter blurs with radius 2 and the configured narrowing."""
        blur = StackBlurFilter()
        assert blur.radius == 2
        assert blur.narrowing is None
        assert blur.enabled

    def test_apply_matches_function(self, random_rgba):
        """apply() gives the same result as stack_blur()."""
        blur = StackBlurFilter(radius=3)
        np.testing.assert_array_equal(blur.apply(random_rgba), stack_blur(random_rgba, 3))

    def test_call(self, random_rgba):
        """Calling the filter is the same as apply()."""
        blur = StackBlurFilter(radius=1)
        np.testing.assert_array_equal(blur(random_rgba), blur.apply(random_rgba))

    def test_grid_input(self, random_rgba):
        """PixelGrid sources give PixelGrid results."""
        grid = PixelGrid.from_array(random_rgba)
        result = StackBlurFilter(radius=2, narrowing='clamp').apply(grid)
        assert isinstance(result, PixelGrid)
        assert result == stack_blur(grid, 2)

    def test_done_signal(self, random_rgba):
        """The completion signal is forwarded to the blur."""
        done = threading.Event()
        StackBlurFilter(radius=2).apply(random_rgba, done=done)
        assert done.is_set()

    def test_negative_radius_rejected(self):
        """Negative radii fail validation."""
        with pytest.raises(ValidationError):
            StackBlurFilter(radius=-1)

    def test_assignment_is_validated(self):
        """Assigning an invalid radius fails validation."""
        blur = StackBlurFilter()
        with pytest.raises(ValidationError):
            blur.radius = -4

    def test_invalid_narrowing_rejected(self):
        """Unknown narrowing names fail validation."""
        with pytest.raises(ValidationError):
            StackBlurFilter(narrowing='wrap')

    def test_repr(self):
        """repr shows the blur parameters."""
        assert repr(StackBlurFilter(radius=4)) == "StackBlurFilter(radius=4, narrowing=None, enabled=True)"


class TestDisabledFilter:
    """Test a filter with enabled=False."""

    def test_returns_copy(self, random_rgba):
        """A disabled filter returns an unblurred copy and signals completion."""
        done = threading.Event()
        blur = StackBlurFilter(radius=5, enabled=False)
        result = blur.apply(random_rgba, done=done)
        np.testing.assert_array_equal(result, random_rgba)
        assert result is not random_rgba
        assert done.is_set()

    def test_keeps_source_kind(self, random_rgba):
        """RGB arrays and grids come back as the same kind."""
        blur = StackBlurFilter(enabled=False)
        rgb = random_rgba[:, :, :3].copy()
        np.testing.assert_array_equal(blur.apply(rgb), rgb)
        grid = PixelGrid.from_array(random_rgba)
        assert blur.apply(grid) == grid

    @pytest.mark.parametrize("source", [
        np.zeros((0, 4, 4), dtype=np.uint8),
        np.zeros((4, 4, 4), dtype=np.float32),
    ])
    def test_rejects_invalid_source(self, source):
        """Empty and float images are rejected like in an enabled blur."""
        done = threading.Event()
        with pytest.raises(ValueError):
            StackBlurFilter(enabled=False).apply(source, done=done)
        assert not done.is_set()

    def test_rejects_unsupported_type(self):
        """Non-image sources are rejected like in an enabled blur."""
        with pytest.raises(TypeError):
            StackBlurFilter(enabled=False).apply([[1, 2, 3, 4]])


class TestSerialization:
    """Test dictionary round trips and the registry."""

    def test_registered(self):
        """StackBlurFilter registers under its filter type."""
        assert FILTER_REGISTRY['stackBlur'] is StackBlurFilter

    def test_to_dict(self):
        """to_dict includes the type, the parameters and the version."""
        data = StackBlurFilter(radius=7, narrowing='clamp').to_dict()
        assert data['type'] == 'stackBlur'
        assert data['radius'] == 7
        assert data['narrowing'] == 'clamp'
        assert data['enabled'] is True
        assert data['_version'] == 1
        assert 'id' in data

    def test_roundtrip_through_json(self):
        """A filter survives a JSON round trip."""
        original = StackBlurFilter(radius=9, enabled=False)
        restored = BlurFilter.from_dict(json.loads(json.dumps(original.to_dict())))
        assert isinstance(restored, StackBlurFilter)
        assert restored.radius == 9
        assert restored.enabled is False
        assert restored.id == original.id

    def test_unknown_type(self):
        """Unknown filter types are rejected."""
        with pytest.raises(ValueError, match="Unknown filter type"):
            BlurFilter.from_dict({'type': 'boxBlur', 'radius': 2})

    def test_missing_type(self):
        """Dictionaries without a type are rejected."""
        with pytest.raises(ValueError):
            BlurFilter.from_dict({'radius': 2})

    def test_base_is_abstract(self):
        """The base class cannot be instantiated."""
        with pytest.raises(TypeError):
            BlurFilter()
