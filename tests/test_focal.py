"""Tests for focal point detection."""
import numpy as np
import pytest

from smartcrop.core.exceptions import UnknownMethodError
from smartcrop.core.models import CropMethod, FocalPoint, ImageBuffer
from smartcrop.crops.focal import (
    estimate_focal_point,
    find_contrast_focal_point,
    find_edge_focal_point,
    find_skin_focal_point,
    is_skin_tone,
    resolve_method,
    rule_of_thirds_points,
    skin_tone_mask,
)

SKIN = (200, 150, 100)
BLUE = (50, 50, 200)


def make_pixels(width, height, color=(0, 0, 0)):
    """Solid RGBA pixel array."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = color
    pixels[:, :, 3] = 255
    return pixels


def to_buffer(pixels):
    return ImageBuffer.from_array(pixels)


class TestSkinTone:
    """Tests for the skin tone classifier."""

    def test_skin_color(self):
        assert is_skin_tone(*SKIN)

    def test_blue_is_not_skin(self):
        assert not is_skin_tone(*BLUE)

    @pytest.mark.parametrize('rgb', [
        (95, 60, 30),     # red too low
        (200, 40, 30),    # green too low
        (200, 150, 20),   # blue too low
        (150, 160, 30),   # green above red
        (150, 140, 30),   # red and green too close
        (120, 60, 110),   # red and blue too close
        (100, 50, 100),   # blue equals red
    ])
    def test_rejects_each_rule(self, rgb):
        assert not is_skin_tone(*rgb)

    def test_mask_matches_classifier(self):
        colors = [SKIN, BLUE, (255, 255, 255), (96, 41, 21), (180, 120, 90), (0, 0, 0)]
        pixels = make_pixels(len(colors), 1)
        for i, color in enumerate(colors):
            pixels[0, i, :3] = color

        mask = skin_tone_mask(pixels)
        assert mask[0].tolist() == [is_skin_tone(*c) for c in colors]


class TestSkinFocalPoint:
    """Tests for the skin tone region heuristic."""

    def test_finds_skin_block(self):
        pixels = make_pixels(100, 100, BLUE)
        pixels[40:60, 60:80, :3] = SKIN
        result = find_skin_focal_point(to_buffer(pixels))
        assert result == FocalPoint(x=70, y=50, score=1.0, area=400)

    def test_no_skin_returns_none(self):
        assert find_skin_focal_point(to_buffer(make_pixels(100, 100, BLUE))) is None

    def test_ratio_must_exceed_threshold(self):
        pixels = make_pixels(100, 100, BLUE)
        # 6 of 20 rows is exactly 30%
        pixels[20:26, 20:40, :3] = SKIN
        assert find_skin_focal_point(to_buffer(pixels)) is None

        pixels[26, 20:40, :3] = SKIN
        result = find_skin_focal_point(to_buffer(pixels))
        assert (result.x, result.y) == (30, 30)
        assert result.area == 140
        assert result.score == pytest.approx(0.35)

    def test_largest_area_wins(self):
        pixels = make_pixels(100, 100, BLUE)
        pixels[0:10, 0:20, :3] = SKIN      # half a block
        pixels[40:60, 40:60, :3] = SKIN    # full block, later in scan order
        result = find_skin_focal_point(to_buffer(pixels))
        assert (result.x, result.y) == (50, 50)

    def test_tie_goes_to_first_block(self):
        pixels = make_pixels(100, 100, BLUE)
        pixels[40:60, 40:60, :3] = SKIN
        pixels[0:20, 20:40, :3] = SKIN
        result = find_skin_focal_point(to_buffer(pixels))
        assert (result.x, result.y) == (30, 10)

    def test_skin_in_dropped_last_column_is_ignored(self):
        # Block origins are 0, 20, 40, 60 for a 100px wide image
        pixels = make_pixels(100, 100, BLUE)
        pixels[:, 80:100, :3] = SKIN
        assert find_skin_focal_point(to_buffer(pixels)) is None


class TestEdgeFocalPoint:
    """Tests for the edge density heuristic."""

    @pytest.fixture
    def square_buffer(self):
        """Black image with a white square inside block (64, 32)."""
        pixels = make_pixels(128, 128)
        pixels[40:50, 70:80, :3] = 255
        return to_buffer(pixels)

    def test_finds_busiest_block(self, square_buffer):
        result = find_edge_focal_point(square_buffer)
        assert (result.x, result.y) == (80, 48)

    def test_score_sums_right_and_below_differences(self, square_buffer):
        result = find_edge_focal_point(square_buffer)
        # Four 10px edges with a 255 brightness step
        assert result.score == pytest.approx(4 * 10 * 255)

    def test_uniform_image_picks_first_block(self):
        result = find_edge_focal_point(to_buffer(make_pixels(128, 128, (90, 90, 90))))
        assert (result.x, result.y, result.score) == (16, 16, 0)

    def test_last_exact_block_is_dropped(self):
        # Only the block at origin 0 fits strictly below 64 - 32
        pixels = make_pixels(64, 64)
        pixels[40:50, 40:50, :3] = 255
        result = find_edge_focal_point(to_buffer(pixels))
        assert (result.x, result.y, result.score) == (16, 16, 0)

    def test_image_smaller_than_block(self):
        assert find_edge_focal_point(to_buffer(make_pixels(20, 20))) is None

    def test_custom_block_size(self, square_buffer):
        result = find_edge_focal_point(square_buffer, block_size=16)
        assert 64 <= result.x <= 96
        assert 32 <= result.y <= 64


class TestContrastFocalPoint:
    """Tests for the contrast heuristic."""

    def test_finds_highest_contrast_block(self):
        pixels = make_pixels(160, 160, (100, 100, 100))
        pixels[50, 100, :3] = 255
        result = find_contrast_focal_point(to_buffer(pixels))
        assert (result.x, result.y) == (100, 60)
        assert result.score == pytest.approx(155)

    def test_uniform_image_picks_first_block(self):
        result = find_contrast_focal_point(to_buffer(make_pixels(160, 160, (30, 60, 90))))
        assert (result.x, result.y, result.score) == (20, 20, 0)

    def test_image_smaller_than_block(self):
        assert find_contrast_focal_point(to_buffer(make_pixels(40, 40))) is None


class TestRuleOfThirds:
    """Tests for rule-of-thirds points."""

    def test_points(self):
        points = rule_of_thirds_points(900, 600)
        assert [(p.x, p.y) for p in points] == [
            (300, 200), (600, 200), (300, 400), (600, 400),
        ]

    def test_names(self):
        names = [p.name for p in rule_of_thirds_points(900, 600)]
        assert names == ['top-left', 'top-right', 'bottom-left', 'bottom-right']


class TestEstimate:
    """Tests for method dispatch and the auto fallback."""

    @pytest.fixture
    def edges_only(self):
        """Skin-free image with some structure."""
        pixels = make_pixels(200, 150, BLUE)
        pixels[60:90, 100:130, :3] = (255, 255, 255)
        return to_buffer(pixels)

    @pytest.fixture
    def with_skin(self):
        pixels = make_pixels(200, 150, BLUE)
        pixels[60:90, 100:130, :3] = (255, 255, 255)
        pixels[20:40, 20:40, :3] = SKIN
        return to_buffer(pixels)

    def test_auto_falls_back_to_edges(self, edges_only):
        assert estimate_focal_point(edges_only, 'auto') == find_edge_focal_point(edges_only)

    def test_auto_prefers_skin(self, with_skin):
        result = estimate_focal_point(with_skin, 'auto')
        assert result == find_skin_focal_point(with_skin)
        assert result.area == 400

    def test_default_is_auto(self, edges_only):
        assert estimate_focal_point(edges_only) == estimate_focal_point(edges_only, CropMethod.AUTO)

    def test_explicit_methods(self, with_skin):
        assert estimate_focal_point(with_skin, 'edge') == find_edge_focal_point(with_skin)
        assert estimate_focal_point(with_skin, 'contrast') == find_contrast_focal_point(with_skin)
        assert estimate_focal_point(with_skin, CropMethod.FACE) == find_skin_focal_point(with_skin)

    def test_face_without_skin_is_none(self, edges_only):
        assert estimate_focal_point(edges_only, 'face') is None

    def test_tiny_image_has_no_focal_point(self):
        assert estimate_focal_point(to_buffer(make_pixels(8, 8)), 'auto') is None

    def test_unknown_method(self, edges_only):
        with pytest.raises(UnknownMethodError):
            estimate_focal_point(edges_only, 'saliency')

    def test_resolve_method_is_case_insensitive(self):
        assert resolve_method('EDGE') is CropMethod.EDGE
