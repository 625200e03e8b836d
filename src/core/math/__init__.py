"""
Core math modules для Riemann Sum

Численные примитивы и Riemann Sum Engine.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    # Type checks
    is_real_number,
    is_strict_int,
    is_valid_float,
    # Range checks
    is_in_range,
    is_int_in_range,
    # Summation tolerance
    accumulation_tolerance,
)

# Riemann Sum Engine
from src.core.math.riemann import (
    Integrand,
    RiemannSumEngine,
    RiemannSumResult,
    compare_rules,
    integrate,
    iter_sample_points,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    # Numerical Safeguards — Type checks
    "is_real_number",
    "is_strict_int",
    "is_valid_float",
    # Numerical Safeguards — Range checks
    "is_in_range",
    "is_int_in_range",
    # Numerical Safeguards — Summation tolerance
    "accumulation_tolerance",
    # Riemann — Types
    "Integrand",
    "RiemannSumEngine",
    "RiemannSumResult",
    # Riemann — Functions
    "compare_rules",
    "integrate",
    "iter_sample_points",
]
