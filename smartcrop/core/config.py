"""Configuration constants for smartcrop."""
from __future__ import annotations
from pathlib import Path

# === IMAGE FILE EXTENSIONS ===
IMAGE_EXTENSIONS = {
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tif', '.tiff',
}

# === FOCAL POINT SCAN ===
# Side length of the square scan blocks, in pixels
EDGE_BLOCK_SIZE = 32
SKIN_BLOCK_SIZE = 20
CONTRAST_BLOCK_SIZE = 40

# A block counts as a skin region above this share of skin pixels
SKIN_RATIO_THRESHOLD = 0.3

# Per-pixel skin tone rule (RGB)
SKIN_TONE_RULE = {
    'min_red': 95,
    'min_green': 40,
    'min_blue': 20,
    'min_red_green_diff': 15,   # |R - G| must exceed this
    'min_red_blue_diff': 15,    # R - B must exceed this
}

# === OUTPUT ===
DEFAULT_OUTPUT_WIDTH = 800    # smart crop output width
COMPARE_OUTPUT_WIDTH = 400    # per-method previews
DEFAULT_ASPECT_RATIO = '16:9'
JPEG_QUALITY = 90  # 1-100, higher = better quality, larger file

# === PATHS ===
DEFAULT_CONFIG_DIR = Path.home() / '.smartcrop'
DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / 'logs'
