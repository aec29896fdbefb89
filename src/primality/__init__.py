"""Primality — детерминированная классификация u64 чисел.

- Miller-Rabin с фиксированным набором баз-свидетелей
- Ранний выход на первой базе, доказавшей составность
- Stateless: безопасен для вызова из нескольких потоков
"""

from .miller_rabin import (
    DETERMINISTIC_BOUND,
    WITNESS_BASES,
    MillerRabinConfig,
    MillerRabinResult,
    MillerRabinTester,
    classify,
    decompose,
    is_prime,
)

__all__ = [
    "DETERMINISTIC_BOUND",
    "WITNESS_BASES",
    "MillerRabinConfig",
    "MillerRabinResult",
    "MillerRabinTester",
    "classify",
    "decompose",
    "is_prime",
]
