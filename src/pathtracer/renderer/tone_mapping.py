# renderer/tone_mapping.py
import numpy as np


def gamma_correct(image: np.ndarray, gamma: float = 2.0) -> np.ndarray:
    """
    Map linear colors to display space. The default gamma of 2 is a per
    channel square root.
    """
    linear = np.clip(np.asarray(image, dtype=np.float64), 0.0, None)
    if gamma == 2.0:
        return np.sqrt(linear)
    return linear ** (1.0 / gamma)


def to_uint8(image: np.ndarray) -> np.ndarray:
    """Quantize display colors as int(255.99 * c), clamped to [0, 255]."""
    scaled = np.nan_to_num(np.asarray(image, dtype=np.float64) * 255.99, nan=0.0)
    return np.clip(np.floor(scaled), 0, 255).astype(np.uint8)


def reinhard_tone_mapping(accumulated, exposure=1.0, white_point=1.0, gamma=2.2):
    """
    Apply Reinhard tone mapping to a linear radiance image. Compresses bright
    emitters smoothly instead of clipping them.
    """
    scaled = np.clip(np.asarray(accumulated, dtype=np.float64), 0.0, None) * exposure
    mapped = scaled / (1.0 + scaled / white_point)
    mapped = mapped ** (1.0 / gamma)
    return to_uint8(mapped)


def auto_exposure_tone_mapping(accumulated, gamma=2.2, target_midgray=0.18):
    """
    Compute an exposure value based on the average scene luminance and then
    apply Reinhard tone mapping.
    """
    accumulated = np.asarray(accumulated, dtype=np.float64)
    luminance = 0.2126 * accumulated[:, :, 0] + 0.7152 * accumulated[:, :, 1] + 0.0722 * accumulated[:, :, 2]
    avg_lum = luminance.mean() + 1e-5  # avoid division by zero
    exposure = target_midgray / avg_lum
    return reinhard_tone_mapping(accumulated, exposure=exposure, white_point=1.0, gamma=gamma)


def tone_map(image: np.ndarray, mode: str = "gamma") -> np.ndarray:
    """Linear image to 8-bit RGB using one of the named modes."""
    if mode == "gamma":
        return to_uint8(gamma_correct(image))
    if mode == "reinhard":
        return reinhard_tone_mapping(image)
    if mode == "auto":
        return auto_exposure_tone_mapping(image)
    raise ValueError(f"Unknown tone mapping '{mode}'")
