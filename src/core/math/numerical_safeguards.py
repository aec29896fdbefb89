"""
Numerical Safeguards — u64 Domain Primitives

Модуль задаёт домен беззнаковых 64-битных целых, в котором работают
модульная арифметика и тест простоты:
- Константы домена (разрядность, максимум, граница 2^64)
- Предикаты принадлежности домену
- Валидация операндов и модуля с понятными сообщениями об ошибках

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любой операнд лежит в [0, 2^64)
2. Модуль m > 0 (нулевой модуль → ModulusDomainViolation)
3. bool не считается целым операндом (True/False отклоняются)
4. Все проверки детерминированы и не имеют побочных эффектов
"""

from typing import Final

# =============================================================================
# U64 DOMAIN КОНСТАНТЫ
# =============================================================================

# Разрядность машинного слова
U64_BITS: Final[int] = 64

# Исключающая верхняя граница домена: 2^64
U64_LIMIT: Final[int] = 1 << U64_BITS

# Максимальное представимое значение: 2^64 - 1
U64_MAX: Final[int] = U64_LIMIT - 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ModulusDomainViolation(ValueError):
    """
    Нарушение контракта модуля: m == 0.

    Нулевой модуль не определён ни для одной операции ядра.
    Тест простоты никогда не передаёт m == 0, поэтому возникновение
    этого исключения означает ошибку вызывающего кода.
    """

    pass


# =============================================================================
# ПРЕДИКАТЫ ДОМЕНА
# =============================================================================


def is_u64(value: object) -> bool:
    """
    Проверка, является ли значение беззнаковым 64-битным целым.

    Args:
        value: Проверяемое значение

    Returns:
        True если value — int (не bool) в диапазоне [0, 2^64)

    Examples:
        >>> is_u64(0)
        True
        >>> is_u64(2**64 - 1)
        True
        >>> is_u64(2**64)
        False
        >>> is_u64(-1)
        False
        >>> is_u64(True)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value < U64_LIMIT


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_u64(value: object, name: str) -> None:
    """
    Валидация, что значение — беззнаковое 64-битное целое.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value не int, bool, отрицательное или >= 2^64
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > U64_MAX:
        raise ValueError(f"{name} must be < 2^{U64_BITS}, got {value}")


def validate_modulus(m: object, name: str = "m") -> None:
    """
    Валидация модуля: беззнаковое 64-битное целое и строго больше нуля.

    Args:
        m: Модуль
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если m вне u64 домена
        ModulusDomainViolation: Если m == 0
    """
    validate_u64(m, name)

    if m == 0:
        raise ModulusDomainViolation(f"{name} must be positive, got 0")


def validate_operands(a: object, b: object, m: object) -> None:
    """
    Валидация тройки (a, b, m) для операций ядра.

    Raises:
        ValueError: Если a или b вне u64 домена
        ModulusDomainViolation: Если m == 0
    """
    validate_u64(a, "a")
    validate_u64(b, "b")
    validate_modulus(m)
