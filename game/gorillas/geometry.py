"""
Circle-circle overlap and the explosion damage model
"""

from __future__ import annotations

import math
import warnings

from .utils import clamp, distance

# Tolerances for floating point drift near the tangent/containment boundaries
RADICAND_TOLERANCE = 1e-9
BOUNDARY_EPS = 1e-4
NEGLIGIBLE_AREA = 1e-6


def _contained_area(r1: float, r2: float) -> float:
    return math.pi * min(r1, r2) ** 2


def circle_intersection_area(r1: float, r2: float, d: float) -> float:
    """Area of the lens where two circles overlap.

    Args:
        r1: Radius of the first circle.
        r2: Radius of the second circle.
        d: Distance between the two centers.

    Returns:
        Overlap area, always within ``[0, pi * min(r1, r2)**2]``.
    """
    if d >= r1 + r2:
        return 0.0
    if d <= abs(r1 - r2):
        return _contained_area(r1, r2)

    r1_sq = r1 * r1
    r2_sq = r2 * r2
    d_sq = d * d

    arg1 = clamp((d_sq + r1_sq - r2_sq) / (2 * d * r1), -1.0, 1.0)
    arg2 = clamp((d_sq + r2_sq - r1_sq) / (2 * d * r2), -1.0, 1.0)

    radicand = (-d + r1 + r2) * (d + r1 - r2) * (d - r1 + r2) * (d + r1 + r2)
    if radicand < 0:
        if radicand < -RADICAND_TOLERANCE:
            warnings.warn(
                f"negative radicand {radicand!r} for r1={r1}, r2={r2}, d={d}",
                RuntimeWarning,
                stacklevel=2,
            )
            if abs(d - (r1 + r2)) < BOUNDARY_EPS:
                return 0.0
            if abs(d - abs(r1 - r2)) < BOUNDARY_EPS:
                return _contained_area(r1, r2)
            return 0.0
        radicand = 0.0

    area = r1_sq * math.acos(arg1) + r2_sq * math.acos(arg2) - 0.5 * math.sqrt(radicand)

    if math.isnan(area) or area < 0:
        warnings.warn(
            f"invalid intersection area {area!r} for r1={r1}, r2={r2}, d={d}",
            RuntimeWarning,
            stacklevel=2,
        )
        return 0.0

    # Lens formula can overshoot the smaller disc by a rounding error
    return min(area, _contained_area(r1, r2))


def explosion_damage(
    explosion_x: float,
    explosion_y: float,
    explosion_radius: float,
    target_x: float,
    target_y: float,
    target_radius: float,
    min_damage: float = 20.0,
    damage_span: float = 70.0,
    max_damage: float = 90.0,
    graze_epsilon: float = 1.0,
) -> float:
    """Damage dealt by a blast to a circular target.

    Any real overlap scales from ``min_damage`` up to ``max_damage`` with the
    covered fraction of the target's area. A blast that only grazes the
    target edge deals ``min_damage``; a miss deals nothing.
    """
    d = distance(explosion_x, explosion_y, target_x, target_y)
    area = circle_intersection_area(target_radius, explosion_radius, d)

    if area < NEGLIGIBLE_AREA:
        if d <= explosion_radius + target_radius + graze_epsilon:
            return min_damage
        return 0.0

    target_area = math.pi * target_radius ** 2
    if target_area < NEGLIGIBLE_AREA:
        return max_damage

    fraction = clamp(area / target_area, 0.0, 1.0)
    return clamp(min_damage + fraction * damage_span, 0.0, max_damage)
