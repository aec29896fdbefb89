"""
Modular Arithmetic — Overflow-Safe u64 Kernel

Модуль реализует сложение, вычитание, умножение и возведение в степень
по модулю m для беззнаковых 64-битных операндов так, что ни одно
промежуточное значение быстрого пути не выходит за пределы [0, 2^64):
- mod_add: a+b mod m без вычисления a+b при a+b >= m
- mod_sub: a-b mod m без отрицательного промежуточного значения
- mod_mul: "double-and-add", O(log b) модульных сложений
- mod_pow: "square-and-multiply", O(log b) модульных умножений

Дополнительно доступны "wide" варианты (mod_mul_wide, mod_pow_wide),
использующие длинную арифметику Python: результат побитово совпадает
с shift-and-add вариантами для любых допустимых входов.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции лежит в [0, m) при m > 0
2. При m == 1 все результаты равны 0 (включая mod_pow(a, 0, 1))
3. m == 0 → ModulusDomainViolation (явная ошибка вместо UB)
4. Все функции чистые: нет состояния, нет побочных эффектов

ФОРМУЛЫ:
    a + b >= m  <=>  a >= m - b          (при a, b < m)
    (a + b) mod m = a - (m - b)          если a >= m - b
    (a - b) mod m = a + (m - b)          если a < b
"""

from enum import Enum
from typing import Callable

from src.core.math.numerical_safeguards import validate_operands


# =============================================================================
# ENUMS
# =============================================================================


class ArithmeticBackend(str, Enum):
    """Реализация модульного умножения/возведения в степень"""

    SHIFT_ADD = "shift_add"
    WIDE = "wide"


# =============================================================================
# UNCHECKED PRIMITIVES
# =============================================================================
# Внутренние версии без валидации: вызываются из циклов mod_mul/mod_pow,
# где операнды уже проверены публичной функцией.


def _mod_add(a: int, b: int, m: int) -> int:
    if a < m and b < m:
        # a + b >= m проверяется как a >= m - b, чтобы не формировать a + b
        if a >= m - b:
            return a - (m - b)
        return a + b

    # Предусловие нарушено: медленный путь через остатки
    return ((a % m) + (b % m)) % m


def _mod_sub(a: int, b: int, m: int) -> int:
    if a < m and b < m:
        if a < b:
            return a + (m - b)
        return a - b

    # Медленный путь: та же коррекция знака, затем приведение по модулю
    if a < b:
        return (a + (m - b)) % m
    return (a - b) % m


def _mod_mul(a: int, b: int, m: int) -> int:
    r = 0
    while b > 0:
        if b & 1:
            r = _mod_add(r, a, m)
        b >>= 1
        a = _mod_add(a, a, m)
    return r


def _mod_pow(a: int, b: int, m: int) -> int:
    r = 1 % m
    while b > 0:
        if b & 1:
            r = _mod_mul(r, a, m)
        b >>= 1
        a = _mod_mul(a, a, m)
    return r


def _mod_pow_wide(a: int, b: int, m: int) -> int:
    return pow(a, b, m)


# =============================================================================
# PUBLIC KERNEL
# =============================================================================


def mod_add(a: int, b: int, m: int) -> int:
    """
    Вычисление (a + b) mod m без переполнения.

    Быстрый путь (a, b < m):
        - если a >= m - b (т.е. a + b >= m) → a - (m - b)
        - иначе → a + b (сумма < m, переполнение невозможно)
    Медленный путь (a >= m или b >= m):
        ((a mod m) + (b mod m)) mod m

    Args:
        a: Первое слагаемое, [0, 2^64)
        b: Второе слагаемое, [0, 2^64)
        m: Модуль, (0, 2^64)

    Returns:
        (a + b) mod m в диапазоне [0, m)

    Raises:
        ValueError: Если операнд вне u64 домена
        ModulusDomainViolation: Если m == 0

    Examples:
        >>> mod_add(5, 7, 10)
        2
        >>> mod_add(2**64 - 2, 2**64 - 3, 2**64 - 1)
        18446744073709551612
        >>> mod_add(25, 3, 10)  # медленный путь
        8
    """
    validate_operands(a, b, m)
    return _mod_add(a, b, m)


def mod_sub(a: int, b: int, m: int) -> int:
    """
    Вычисление (a - b) mod m, результат всегда неотрицательный.

    Если a < b, возвращается a + (m - b): отрицательное промежуточное
    значение не формируется.

    Args:
        a: Уменьшаемое, [0, 2^64)
        b: Вычитаемое, [0, 2^64)
        m: Модуль, (0, 2^64)

    Returns:
        (a - b) mod m в диапазоне [0, m)

    Raises:
        ValueError: Если операнд вне u64 домена
        ModulusDomainViolation: Если m == 0

    Examples:
        >>> mod_sub(3, 7, 10)
        6
        >>> mod_sub(7, 3, 10)
        4
    """
    validate_operands(a, b, m)
    return _mod_sub(a, b, m)


def mod_mul(a: int, b: int, m: int) -> int:
    """
    Вычисление (a * b) mod m алгоритмом "double-and-add".

    Алгоритм:
        r = 0
        while b > 0:
            if b & 1: r = mod_add(r, a, m)
            b >>= 1
            a = mod_add(a, a, m)

    Полное произведение a * b никогда не формируется.

    Args:
        a: Множитель, [0, 2^64) (приведение по модулю выполняется внутри)
        b: Множитель, [0, 2^64)
        m: Модуль, (0, 2^64)

    Returns:
        (a * b) mod m в диапазоне [0, m)

    Raises:
        ValueError: Если операнд вне u64 домена
        ModulusDomainViolation: Если m == 0
    """
    validate_operands(a, b, m)
    return _mod_mul(a, b, m)


def mod_pow(a: int, b: int, m: int) -> int:
    """
    Вычисление a^b mod m алгоритмом "square-and-multiply" поверх mod_mul.

    Алгоритм:
        r = 1 mod m
        while b > 0:
            if b & 1: r = mod_mul(r, a, m)
            b >>= 1
            a = mod_mul(a, a, m)

    Args:
        a: Основание, [0, 2^64)
        b: Показатель, [0, 2^64)
        m: Модуль, (0, 2^64)

    Returns:
        a^b mod m в диапазоне [0, m); при m == 1 всегда 0

    Raises:
        ValueError: Если операнд вне u64 домена
        ModulusDomainViolation: Если m == 0

    Examples:
        >>> mod_pow(2, 10, 1000)
        24
        >>> mod_pow(7, 0, 13)
        1
        >>> mod_pow(7, 0, 1)
        0
    """
    validate_operands(a, b, m)
    return _mod_pow(a, b, m)


def mod_mul_wide(a: int, b: int, m: int) -> int:
    """
    (a * b) mod m через длинную арифметику (widen-multiply-then-reduce).

    Побитово совпадает с mod_mul для любых допустимых входов.
    """
    validate_operands(a, b, m)
    return (a * b) % m


def mod_pow_wide(a: int, b: int, m: int) -> int:
    """
    a^b mod m через встроенный pow(a, b, m).

    Побитово совпадает с mod_pow для любых допустимых входов.
    """
    validate_operands(a, b, m)
    return _mod_pow_wide(a, b, m)


def pow_for(backend: ArithmeticBackend) -> Callable[[int, int, int], int]:
    """
    Непроверяемая функция возведения в степень для заданного backend.

    Используется тестом простоты во внутреннем цикле, где аргументы
    гарантированно лежат в u64 домене, а модуль положителен.

    Args:
        backend: SHIFT_ADD или WIDE

    Returns:
        Функция (a, b, m) -> a^b mod m
    """
    if backend == ArithmeticBackend.WIDE:
        return _mod_pow_wide
    return _mod_pow
