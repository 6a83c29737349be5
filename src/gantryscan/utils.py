def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Affine remap of `value` from [in_min, in_max] to [out_min, out_max]."""
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def clamp(value: float, lower: float, upper: float) -> float:
    """Saturate `value` into [lower, upper]."""
    return max(lower, min(upper, value))
