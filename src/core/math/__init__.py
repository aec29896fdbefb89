"""
Core math modules

Модульная арифметика над u64 с гарантией отсутствия переполнения.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Domain constants
    U64_BITS,
    U64_LIMIT,
    U64_MAX,
    # Exceptions
    ModulusDomainViolation,
    # Predicates
    is_u64,
    # Validation
    validate_modulus,
    validate_operands,
    validate_u64,
)

# Modular Arithmetic
from src.core.math.modular import (
    ArithmeticBackend,
    mod_add,
    mod_mul,
    mod_mul_wide,
    mod_pow,
    mod_pow_wide,
    mod_sub,
    pow_for,
)

__all__ = [
    # Numerical Safeguards — Domain constants
    "U64_BITS",
    "U64_LIMIT",
    "U64_MAX",
    # Numerical Safeguards — Exceptions
    "ModulusDomainViolation",
    # Numerical Safeguards — Predicates
    "is_u64",
    # Numerical Safeguards — Validation
    "validate_modulus",
    "validate_operands",
    "validate_u64",
    # Modular Arithmetic — Types
    "ArithmeticBackend",
    # Modular Arithmetic — Functions
    "mod_add",
    "mod_sub",
    "mod_mul",
    "mod_pow",
    "mod_mul_wide",
    "mod_pow_wide",
    "pow_for",
]
