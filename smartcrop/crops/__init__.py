"""Crop geometry, focal point detection and smart cropping."""

from .focal import estimate_focal_point, rule_of_thirds_points
from .geometry import compute_center_crop, compute_focal_crop
from .presets import ASPECT_RATIOS, get_preset_info, parse_aspect_ratio
from .smart_crop import smart_crop, center_crop, crop_to_preset, compare_methods

__all__ = [
    'ASPECT_RATIOS',
    'get_preset_info',
    'parse_aspect_ratio',
    'compute_center_crop',
    'compute_focal_crop',
    'estimate_focal_point',
    'rule_of_thirds_points',
    'smart_crop',
    'center_crop',
    'crop_to_preset',
    'compare_methods',
]
