"""
Bundled function families.
"""

from approxlab.functions.sine import (
    piecewise_f32_sin,
    cordic_sin,
    chebyshev_sin,
    sine_family,
    SINE_VARIANTS
)

__all__ = [
    'piecewise_f32_sin',
    'cordic_sin',
    'chebyshev_sin',
    'sine_family',
    'SINE_VARIANTS'
]
