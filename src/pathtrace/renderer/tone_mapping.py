# renderer/tone_mapping.py
import numpy as np

def sanitize(linear: np.ndarray) -> np.ndarray:
    """
    Replace NaN, infinite and negative radiance with zero.
    """
    out = np.nan_to_num(np.asarray(linear, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    return np.maximum(out, 0.0)

def gamma_correct(linear: np.ndarray, gamma: float = 2.0) -> np.ndarray:
    """
    Map linear radiance to display values. The default gamma of 2 is the
    square-root curve.
    """
    linear = sanitize(linear)
    if gamma == 2.0:
        return np.sqrt(linear)
    return linear ** (1.0 / gamma)

def quantize(display: np.ndarray) -> np.ndarray:
    """
    Convert display values in [0, 1] to bytes in [0, 255].
    """
    return (np.clip(display, 0.0, 0.999) * 256).astype("uint8")

def reinhard_tone_mapping(accumulated, exposure=1.0, white_point=1.0, gamma=2.0):
    """
    Apply Reinhard tone mapping to a linear radiance image.
    """
    scaled = sanitize(accumulated) * exposure
    mapped = scaled / (1.0 + scaled / white_point)
    return quantize(gamma_correct(mapped, gamma))

def auto_exposure_tone_mapping(accumulated, gamma=2.0, target_midgray=0.18):
    """
    Compute an exposure value based on the average scene luminance and then
    apply Reinhard tone mapping.
    """
    accumulated = sanitize(accumulated)
    # Compute per-pixel luminance using standard coefficients.
    luminance = 0.2126 * accumulated[:, :, 0] + 0.7152 * accumulated[:, :, 1] + 0.0722 * accumulated[:, :, 2]
    avg_lum = luminance.mean() + 1e-5  # avoid division by zero
    exposure = target_midgray / avg_lum
    return reinhard_tone_mapping(accumulated, exposure=exposure, white_point=1.0, gamma=gamma)
