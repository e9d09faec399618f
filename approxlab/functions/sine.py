"""
Sine approximations.

Three approximations of sin(x), each a pure float -> float function:

- ``piecewise_f32_sin``: single-precision odd polynomials chosen by the size
  of the reduced angle
- ``cordic_sin``: 16-iteration CORDIC rotation
- ``chebyshev_sin``: degree-9 odd polynomial on the angle reduced to (-pi, pi]

The single-precision variant uses NumPy float32 scalars so that every
intermediate result is rounded to single precision.
"""

import math

import numpy as np

from approxlab.family import (
    ApproximationVariant,
    FunctionFamily,
    ReferenceImplementation,
    build_family,
)


PI = math.pi
TWO_PI = 2.0 * math.pi
HALF_PI = math.pi / 2.0

# Inputs this close to +/-pi are treated as sin(x) = 0
PI_SNAP_EPSILON = 1e-14

# Single-precision constants
F32_TWO_PI = np.float32(6.28318530)
F32_PI = np.float32(3.14159265)
F32_HALF_PI = np.float32(1.57079632)
F32_RECIP_TWO_PI = np.float32(1.0) / F32_TWO_PI
F32_HALF = np.float32(0.5)
F32_SMALL_ANGLE = np.float32(1e-5)
F32_MAX = float(np.finfo(np.float32).max)

# Bucket limits for the folded angle. Empirically tuned; the polynomial used
# for each bucket is only accurate enough inside its own bucket.
F32_LOW_BUCKET = np.float32(0.5)
F32_MID_BUCKET = np.float32(1.3)

# Odd polynomial coefficients, nested form x*(1 - x^2*(c1 - x^2*(c2 - ...)))
F32_LOW_COEFFS = tuple(np.float32(c) for c in (
    1.0, 0.16666666, 0.00833333, 0.00019841
))
F32_MID_COEFFS = tuple(np.float32(c) for c in (
    1.0, 0.16666667, 0.00833333, 0.00019841, 0.00000276
))
F32_HIGH_COEFFS = tuple(np.float32(c) for c in (
    1.0, 0.16666667, 0.00833333, 0.00019841, 0.00000276, 0.00000002
))

# atan(2^-i), i in [0, 15]
CORDIC_ANGLES = (
    0.78539816339744830961566084581988,
    0.46364760900080611621425623146121,
    0.24497866312686415417208248121125,
    0.12435499454676143503135484916387,
    0.06241880999595735001266223708923,
    0.03123983343026827677213224609375,
    0.01562372862047683143278159022963,
    0.00781234106010111072490699797697,
    0.00390623013196697053054907127756,
    0.00195312251647881851173596536827,
    0.00097656218955931943040518985934,
    0.00048828121119489827547633981431,
    0.00024414062014936176401972135958,
    0.00012207031189367020424246244476,
    0.00006103515617420877374873989883,
    0.00003051757811552610187500593106,
)
CORDIC_POWERS = tuple(math.ldexp(1.0, -i) for i in range(len(CORDIC_ANGLES)))

# Product of 1/sqrt(1 + 2^(-2i)) over the iterations
CORDIC_K = 0.6072529350088812561694

# Nested Taylor coefficients 1/3!, 1/5!, 1/7!; the x^9 term divides by 9!
CHEBYSHEV_C3 = 1.0 / 6.0
CHEBYSHEV_C5 = 1.0 / 120.0
CHEBYSHEV_C7 = 1.0 / 5040.0
NINE_FACTORIAL = 362880.0


def _odd_horner_f32(x, coefficients):
    """Evaluate x*(c0 - x^2*(c1 - x^2*(...))) in single precision."""
    x2 = x * x
    acc = coefficients[-1]
    for c in coefficients[-2::-1]:
        acc = c - x2 * acc
    return x * acc


def _near_pi(x: float) -> bool:
    return abs(x - PI) < PI_SNAP_EPSILON or abs(x + PI) < PI_SNAP_EPSILON


def _reduce_angle(x: float) -> float:
    """Reduce x to (-pi, pi] with a truncating modulo and one correction."""
    angle = math.fmod(x, TWO_PI)
    if angle > PI:
        angle -= TWO_PI
    elif angle < -PI:
        angle += TWO_PI
    return angle


def piecewise_f32_sin(x: float) -> float:
    """
    Piecewise single-precision sine.

    The angle is reduced by the nearest multiple of 2*pi, folded into
    [0, pi/2] and evaluated with a degree 7, 9 or 11 odd polynomial depending
    on its size. Angles below 1e-5 after reduction are returned unchanged.
    """
    if not abs(x) <= F32_MAX:
        return math.nan

    xf = np.float32(x)
    offset = F32_HALF if xf >= 0 else -F32_HALF
    n = int(xf * F32_RECIP_TWO_PI + offset)
    angle = xf - np.float32(n) * F32_TWO_PI

    if abs(angle) < F32_SMALL_ANGLE:
        return float(angle)

    negate = False
    if angle < 0:
        angle = -angle
        negate = True

    if angle > F32_PI:
        angle = F32_TWO_PI - angle
        negate = not negate

    if angle > F32_HALF_PI:
        angle = F32_PI - angle

    if angle < F32_LOW_BUCKET:
        result = _odd_horner_f32(angle, F32_LOW_COEFFS)
    elif angle < F32_MID_BUCKET:
        result = _odd_horner_f32(angle, F32_MID_COEFFS)
    else:
        result = _odd_horner_f32(angle, F32_HIGH_COEFFS)

    return float(-result if negate else result)


def cordic_sin(x: float) -> float:
    """
    CORDIC sine in double precision.

    The angle is reduced to (-pi, pi], folded into the first quadrant and
    rotated from (1, 0) by 16 micro-rotations of atan(2^-i). The y component
    scaled by the CORDIC gain is the sine of the folded angle.
    """
    if not math.isfinite(x):
        return math.nan
    if _near_pi(x):
        return 0.0

    angle = _reduce_angle(x)

    negate = False
    if 0 <= angle <= HALF_PI:
        pass
    elif HALF_PI < angle <= PI:
        angle = PI - angle
    elif -PI <= angle < -HALF_PI:
        angle = -PI - angle
    else:
        angle = -angle
        negate = True

    if angle == 0.0:
        return 0.0

    x0 = 1.0
    y0 = 0.0
    z = angle
    for power, step in zip(CORDIC_POWERS, CORDIC_ANGLES):
        sign = 1 if z >= 0 else -1
        x0, y0 = x0 - sign * y0 * power, y0 + sign * x0 * power
        z -= sign * step

    y0 *= CORDIC_K
    return -y0 if negate else y0


def chebyshev_sin(x: float) -> float:
    """Degree-9 odd polynomial on the angle reduced to (-pi, pi]."""
    if not math.isfinite(x):
        return math.nan
    if _near_pi(x):
        return 0.0

    angle = _reduce_angle(x)
    x2 = angle * angle
    return angle * (1.0 - x2 * (CHEBYSHEV_C3 - x2 * (CHEBYSHEV_C5 - x2 * (
        CHEBYSHEV_C7 - x2 / NINE_FACTORIAL))))


SINE_VARIANTS = (
    ApproximationVariant("Piecewise 32-bit sine approximation", piecewise_f32_sin),
    ApproximationVariant("CORDIC sine approximation", cordic_sin),
    ApproximationVariant("Chebyshev polynomial sine approximation", chebyshev_sin),
)


def sine_family() -> FunctionFamily:
    """Build the sine family: math.sin as reference, three approximations."""
    return build_family(
        name="Sin Approximations",
        default_range=(-math.pi, math.pi),
        references=[ReferenceImplementation("sin", math.sin)],
        variants=SINE_VARIANTS
    )
