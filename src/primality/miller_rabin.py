"""Miller-Rabin — детерминированный тест простоты для u64.

Для n < 2^64 достаточно проверить базы-свидетели
2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37.

Порядок проверок:
1. n == 2 или n == 3 → PRIME (для них не выполняется a < n - 1 при a = 2)
2. n == 0, n == 1 или n чётное → COMPOSITE
3. Разложение n - 1 = 2^k * q, q нечётное
4. Для каждой базы a < n - 1:
   * a^q mod n == 1 → база не доказывает составность
   * (a^q)^(2^j) mod n == n - 1 для некоторого j in [0, k) → не доказывает
   * иначе → COMPOSITE (ранний выход, остальные базы не проверяются)
5. Ни одна база не доказала составность → PRIME

Показатель 2^j приводится по модулю n - 1 (малая теорема Ферма).
Корректность гарантируется только для n < 2^64, хотя этот же набор
баз покрывает и n < 3,317,044,064,679,887,385,961,981.
"""

from dataclasses import dataclass
from typing import Callable, Final, Optional

from src.core.domain.verdict import Primality, PrimalityVerdict, VerdictReason
from src.core.math.modular import ArithmeticBackend, pow_for
from src.core.math.numerical_safeguards import U64_LIMIT, validate_u64


# Фиксированный упорядоченный набор баз-свидетелей
WITNESS_BASES: Final[tuple[int, ...]] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Исключающая граница, до которой ответ гарантированно детерминирован
DETERMINISTIC_BOUND: Final[int] = U64_LIMIT


def decompose(n_minus_1: int) -> tuple[int, int]:
    """Разложение n - 1 = 2^k * q, где q нечётное.

    Args:
        n_minus_1: положительное целое (n - 1)

    Returns:
        (k, q)

    Raises:
        ValueError: если n_minus_1 <= 0
    """
    if n_minus_1 <= 0:
        raise ValueError(f"n - 1 must be positive, got {n_minus_1}")

    k = 0
    q = n_minus_1
    while q % 2 == 0:
        k += 1
        q >>= 1
    return k, q


@dataclass(frozen=True)
class MillerRabinConfig:
    """Конфигурация теста.

    backend — реализация возведения в степень (SHIFT_ADD или WIDE).
    Набор баз не настраивается: всегда WITNESS_BASES.
    """

    backend: ArithmeticBackend = ArithmeticBackend.SHIFT_ADD


@dataclass(frozen=True)
class MillerRabinResult:
    """Результат теста Miller-Rabin."""

    n: int
    verdict: Primality
    reason: VerdictReason

    # База, доказавшая составность (только для reason == WITNESS)
    witness: Optional[int]

    # Разложение n - 1 = 2^k * q (None если до него не дошли)
    k: Optional[int]
    q: Optional[int]

    witnesses_checked: tuple[int, ...]

    # Для отладки
    details: str

    @property
    def is_prime(self) -> bool:
        return self.verdict == Primality.PRIME

    def to_verdict(self) -> PrimalityVerdict:
        """Конвертация в доменную модель PrimalityVerdict."""
        return PrimalityVerdict(
            n=self.n,
            verdict=self.verdict,
            reason=self.reason,
            witness=self.witness,
            k=self.k,
            q=self.q,
            witnesses_checked=self.witnesses_checked,
        )


class MillerRabinTester:
    """Детерминированный тест простоты Miller-Rabin.

    Stateless: evaluate() не изменяет объект, поэтому один экземпляр
    можно безопасно использовать из нескольких потоков.
    """

    def __init__(self, config: Optional[MillerRabinConfig] = None):
        self.config = config or MillerRabinConfig()
        self._pow: Callable[[int, int, int], int] = pow_for(self.config.backend)

    def evaluate(self, n: int) -> MillerRabinResult:
        """Классификация n как PRIME или COMPOSITE.

        Args:
            n: тестируемое число, [0, 2^64)

        Returns:
            MillerRabinResult с решением и диагностикой

        Raises:
            ValueError: если n вне u64 домена
        """
        validate_u64(n, "n")

        # 1. Малые простые
        if n == 2 or n == 3:
            return MillerRabinResult(
                n=n,
                verdict=Primality.PRIME,
                reason=VerdictReason.SMALL_PRIME,
                witness=None,
                k=None,
                q=None,
                witnesses_checked=(),
                details=f"{n} is a small prime",
            )

        # 2. 0, 1 и чётные
        if n < 2 or n % 2 == 0:
            return MillerRabinResult(
                n=n,
                verdict=Primality.COMPOSITE,
                reason=VerdictReason.TRIVIAL_COMPOSITE,
                witness=None,
                k=None,
                q=None,
                witnesses_checked=(),
                details=f"{n} is below 2 or even",
            )

        # 3. n - 1 = 2^k * q
        k, q = decompose(n - 1)

        # 4. Цикл по базам-свидетелям
        checked: list[int] = []
        for a in WITNESS_BASES:
            if a >= n - 1:
                continue
            checked.append(a)

            if not self._is_inconclusive(a, n, k, q):
                return MillerRabinResult(
                    n=n,
                    verdict=Primality.COMPOSITE,
                    reason=VerdictReason.WITNESS,
                    witness=a,
                    k=k,
                    q=q,
                    witnesses_checked=tuple(checked),
                    details=f"base {a} is a witness for compositeness of {n} (k={k}, q={q})",
                )

        # 5. Все базы неубедительны
        return MillerRabinResult(
            n=n,
            verdict=Primality.PRIME,
            reason=VerdictReason.ALL_WITNESSES_INCONCLUSIVE,
            witness=None,
            k=k,
            q=q,
            witnesses_checked=tuple(checked),
            details=f"{len(checked)} bases inconclusive for {n} (k={k}, q={q})",
        )

    def _is_inconclusive(self, a: int, n: int, k: int, q: int) -> bool:
        """True если база a не доказывает составность n."""
        x0 = self._pow(a, q, n)
        if x0 == 1:
            return True

        for j in range(k):
            # 2^j < 2^k <= n - 1, приведение по модулю n - 1 не меняет показатель
            if self._pow(x0, self._pow(2, j, n - 1), n) == n - 1:
                return True

        return False


_DEFAULT_TESTER = MillerRabinTester()


def classify(n: int) -> Primality:
    """PRIME или COMPOSITE для n in [0, 2^64)."""
    return _DEFAULT_TESTER.evaluate(n).verdict


def is_prime(n: int) -> bool:
    """True если n in [0, 2^64) — простое.

    Raises:
        ValueError: если n вне u64 домена
    """
    return _DEFAULT_TESTER.evaluate(n).verdict == Primality.PRIME
