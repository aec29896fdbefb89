"""Tests for Miller-Rabin — детерминированный тест простоты u64.

Покрывает:
- Таблицу известных простых/составных чисел
- Числа Кармайкла и сильные псевдопростые по малым наборам баз
- Сверку с перебором делителей на начальном отрезке
- Разложение n - 1 = 2^k * q
- Диагностику результата (reason, witness, witnesses_checked)
- Конфигурацию (backend) и фиксированный набор баз
- Детерминизм и потокобезопасность
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.core.domain.verdict import Primality, PrimalityVerdict, VerdictReason
from src.core.math.modular import ArithmeticBackend
from src.core.math.numerical_safeguards import U64_LIMIT, U64_MAX
from src.primality import (
    DETERMINISTIC_BOUND,
    WITNESS_BASES,
    MillerRabinConfig,
    MillerRabinResult,
    MillerRabinTester,
    classify,
    decompose,
    is_prime,
)


LARGEST_U64_PRIME = 18446744073709551557  # 2^64 - 59

KNOWN_PRIMES = [
    2,
    3,
    5,
    7,
    17,
    97,
    7919,
    65537,
    998244353,
    1000000007,
    4294967279,  # 2^32 - 17
    4294967291,  # 2^32 - 5
    4294967311,  # 2^32 + 15
    2305843009213693951,  # 2^61 - 1
    LARGEST_U64_PRIME,
]

KNOWN_COMPOSITES = [
    0,
    1,
    4,
    9,
    15,
    25,
    49,
    7917,
    4294967297,  # 641 * 6700417
    4294967291 * 4294967279,
    LARGEST_U64_PRIME - 2,
    U64_MAX,  # 3 * 5 * 17 * 257 * 641 * 65537 * 6700417
    U64_MAX - 1,
]

CARMICHAEL_NUMBERS = [561, 1105, 1729, 2465, 2821, 6601, 8911, 41041, 825265]


def _trial_division_is_prime(n: int) -> bool:
    if n < 2:
        return False
    d = 2
    while d * d <= n:
        if n % d == 0:
            return False
        d += 1
    return True


@pytest.fixture
def tester() -> MillerRabinTester:
    return MillerRabinTester()


@pytest.fixture
def wide_tester() -> MillerRabinTester:
    return MillerRabinTester(MillerRabinConfig(backend=ArithmeticBackend.WIDE))


# =============================================================================
# ТЕСТЫ: Constants
# =============================================================================


class TestConstants:
    def test_witness_bases_values_and_order(self):
        assert WITNESS_BASES == (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

    def test_deterministic_bound(self):
        assert DETERMINISTIC_BOUND == 2**64


# =============================================================================
# ТЕСТЫ: decompose
# =============================================================================


class TestDecompose:
    def test_examples(self):
        assert decompose(560) == (4, 35)
        assert decompose(4) == (2, 1)
        assert decompose(6) == (1, 3)
        assert decompose(1) == (0, 1)

    def test_near_u64_max(self):
        assert decompose(U64_MAX - 1) == (1, 2**63 - 1)
        assert decompose(2**63) == (63, 1)
        assert decompose(LARGEST_U64_PRIME - 1) == (2, (LARGEST_U64_PRIME - 1) // 4)

    def test_reconstructs_n_minus_1(self):
        for n_minus_1 in (2, 12, 96, 1024, 123456, 2**40 * 3):
            k, q = decompose(n_minus_1)
            assert q % 2 == 1
            assert (q << k) == n_minus_1

    def test_non_positive_raises(self):
        with pytest.raises(ValueError, match="must be positive"):
            decompose(0)
        with pytest.raises(ValueError, match="must be positive"):
            decompose(-4)


# =============================================================================
# ТЕСТЫ: is_prime / classify
# =============================================================================


class TestIsPrime:
    @pytest.mark.parametrize("n", KNOWN_PRIMES)
    def test_known_primes(self, n):
        assert is_prime(n) is True
        assert classify(n) == Primality.PRIME

    @pytest.mark.parametrize("n", KNOWN_COMPOSITES)
    def test_known_composites(self, n):
        assert is_prime(n) is False
        assert classify(n) == Primality.COMPOSITE

    @pytest.mark.parametrize("n", CARMICHAEL_NUMBERS)
    def test_carmichael_numbers_are_composite(self, n):
        assert classify(n) == Primality.COMPOSITE

    def test_even_numbers_are_composite(self):
        for n in (0, 4, 6, 100, 2**32, 2**63, U64_MAX - 1):
            assert is_prime(n) is False

    def test_matches_trial_division(self):
        for n in range(0, 5000):
            assert is_prime(n) == _trial_division_is_prime(n), n

    def test_out_of_domain_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            is_prime(-7)
        with pytest.raises(ValueError, match=r"< 2\^64"):
            is_prime(U64_LIMIT + 1)
        with pytest.raises(ValueError, match="must be an integer"):
            classify(7.0)

    def test_idempotent(self):
        for n in (561, 2047, LARGEST_U64_PRIME, U64_MAX):
            first = classify(n)
            assert all(classify(n) == first for _ in range(3))

    def test_thread_safe(self):
        numbers = list(range(1, 2000, 3)) + KNOWN_PRIMES + KNOWN_COMPOSITES
        expected = [is_prime(n) for n in numbers]
        with ThreadPoolExecutor(max_workers=4) as pool:
            assert list(pool.map(is_prime, numbers)) == expected


# =============================================================================
# ТЕСТЫ: Strong pseudoprimes
# =============================================================================


class TestStrongPseudoprimes:
    """Составные числа, на которых малые наборы баз ошибаются."""

    def test_2047_passes_base_2(self, tester):
        # 2047 = 23 * 89, сильное псевдопростое по основанию 2
        result = tester.evaluate(2047)
        assert result.verdict == Primality.COMPOSITE
        assert result.witness != 2
        assert result.witnesses_checked[0] == 2
        k, q = decompose(2046)
        assert tester._is_inconclusive(2, 2047, k, q)
        assert not tester._is_inconclusive(result.witness, 2047, k, q)

    def test_3215031751_caught_by_base_11(self, tester):
        # 151 * 751 * 28351, сильное псевдопростое по основаниям 2, 3, 5, 7
        result = tester.evaluate(3215031751)
        assert result.verdict == Primality.COMPOSITE
        assert result.witness == 11
        assert result.witnesses_checked == (2, 3, 5, 7, 11)

    def test_psi_9_caught_by_later_base(self, tester):
        # 149491 * 747451 * 34233211, сильное псевдопростое по основаниям 2..23
        result = tester.evaluate(3825123056546413051)
        assert result.verdict == Primality.COMPOSITE
        assert result.witness > 23


# =============================================================================
# ТЕСТЫ: MillerRabinResult diagnostics
# =============================================================================


class TestEvaluateDiagnostics:
    def test_small_prime(self, tester):
        for n in (2, 3):
            result = tester.evaluate(n)
            assert result.verdict == Primality.PRIME
            assert result.reason == VerdictReason.SMALL_PRIME
            assert result.k is None and result.q is None
            assert result.witnesses_checked == ()

    def test_trivial_composite(self, tester):
        for n in (0, 1, 4, U64_MAX - 1):
            result = tester.evaluate(n)
            assert result.verdict == Primality.COMPOSITE
            assert result.reason == VerdictReason.TRIVIAL_COMPOSITE
            assert result.witness is None
            assert result.witnesses_checked == ()

    def test_witness_skipped_when_not_smaller_than_n_minus_1(self, tester):
        """Базы a >= n - 1 пропускаются"""
        assert tester.evaluate(5).witnesses_checked == (2, 3)
        assert tester.evaluate(7).witnesses_checked == (2, 3, 5)
        assert tester.evaluate(37).witnesses_checked == WITNESS_BASES[:-1]
        assert tester.evaluate(41).witnesses_checked == WITNESS_BASES

    def test_prime_checks_every_base(self, tester):
        result = tester.evaluate(LARGEST_U64_PRIME)
        assert result.is_prime
        assert result.reason == VerdictReason.ALL_WITNESSES_INCONCLUSIVE
        assert result.witnesses_checked == WITNESS_BASES
        assert result.k == 2
        assert (result.q << result.k) == LARGEST_U64_PRIME - 1

    def test_composite_stops_at_first_witness(self, tester):
        result = tester.evaluate(561)
        assert not result.is_prime
        assert result.reason == VerdictReason.WITNESS
        assert result.witness == result.witnesses_checked[-1]
        assert result.k == 4 and result.q == 35
        assert "witness" in result.details

    def test_result_is_frozen(self, tester):
        result = tester.evaluate(17)
        with pytest.raises(AttributeError):
            result.verdict = Primality.COMPOSITE

    @pytest.mark.parametrize("n", [2, 9, 561, 2047, 65537, LARGEST_U64_PRIME, U64_MAX])
    def test_to_verdict(self, tester, n):
        result = tester.evaluate(n)
        verdict = result.to_verdict()
        assert isinstance(verdict, PrimalityVerdict)
        assert verdict.n == n
        assert verdict.verdict == result.verdict
        assert verdict.reason == result.reason
        assert verdict.witness == result.witness
        assert verdict.witnesses_checked == result.witnesses_checked
        assert verdict.is_prime == result.is_prime


# =============================================================================
# ТЕСТЫ: Config / backends
# =============================================================================


class TestMillerRabinConfig:
    def test_defaults(self):
        config = MillerRabinConfig()
        assert config.backend == ArithmeticBackend.SHIFT_ADD

    def test_witness_bases_not_configurable(self):
        """Набор баз фиксирован, передать свой нельзя"""
        with pytest.raises(TypeError):
            MillerRabinConfig(witness_bases=(2,))

    @pytest.mark.parametrize("backend", list(ArithmeticBackend))
    def test_every_backend_uses_fixed_bases(self, backend):
        tester = MillerRabinTester(MillerRabinConfig(backend=backend))
        assert tester.evaluate(2047).verdict == Primality.COMPOSITE
        assert tester.evaluate(65537).witnesses_checked == WITNESS_BASES

    def test_base_order_does_not_change_verdict(self, tester):
        """Обход баз в обратном порядке находит свидетеля для тех же n"""
        for n in CARMICHAEL_NUMBERS + KNOWN_PRIMES + [2047, 3215031751]:
            if n <= 3:
                continue
            k, q = decompose(n - 1)
            composite = any(
                not tester._is_inconclusive(a, n, k, q)
                for a in reversed(WITNESS_BASES)
                if a < n - 1
            )
            assert composite == (classify(n) == Primality.COMPOSITE)

    def test_backends_agree(self, tester, wide_tester):
        numbers = KNOWN_PRIMES + KNOWN_COMPOSITES + CARMICHAEL_NUMBERS + [3825123056546413051]
        for n in numbers:
            assert tester.evaluate(n) == wide_tester.evaluate(n)

    def test_wide_backend_matches_trial_division(self, wide_tester):
        for n in range(0, 3000):
            assert wide_tester.evaluate(n).is_prime == _trial_division_is_prime(n), n

    def test_result_type(self, tester):
        assert isinstance(tester.evaluate(11), MillerRabinResult)


# =============================================================================
# ТЕСТЫ: Serialization
# =============================================================================


class TestVerdictSerialization:
    """Вердикт тестера сериализуется в JSON и восстанавливается без потерь."""

    @pytest.mark.parametrize(
        "n", [0, 1, 2, 3, 4, 5, 561, 2047, 3215031751, LARGEST_U64_PRIME, U64_MAX]
    )
    def test_json_round_trip(self, tester, n):
        verdict = tester.evaluate(n).to_verdict()
        restored = PrimalityVerdict.model_validate_json(verdict.model_dump_json())
        assert restored == verdict
        assert restored.is_prime == is_prime(n)
