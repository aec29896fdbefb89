"""
PrimalityVerdict — Модель результата теста простоты

Immutable Pydantic модель, представляющая классификацию числа n
(PRIME/COMPOSITE) вместе с диагностикой Miller-Rabin.
Сериализуется в JSON средствами pydantic (model_dump_json / model_validate_json).
"""

from enum import Enum
from typing import Final, Optional

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import U64_MAX

# Версия формата сериализованного PrimalityVerdict
VERDICT_SCHEMA_VERSION: Final[str] = "1"


# =============================================================================
# ENUMS
# =============================================================================


class Primality(str, Enum):
    """Терминальный результат классификации"""

    PRIME = "PRIME"
    COMPOSITE = "COMPOSITE"


class VerdictReason(str, Enum):
    """Причина, по которой принято решение"""

    SMALL_PRIME = "small_prime"  # n == 2 или n == 3
    TRIVIAL_COMPOSITE = "trivial_composite"  # n == 0, n == 1 или чётное
    WITNESS = "witness"  # база-свидетель доказала составность
    ALL_WITNESSES_INCONCLUSIVE = "all_witnesses_inconclusive"


# =============================================================================
# VERDICT MODEL
# =============================================================================


class PrimalityVerdict(BaseModel):
    """
    Результат детерминированного теста Miller-Rabin.

    Immutable модель (frozen=True). Содержит:
    - Входное число n и итоговую классификацию
    - Причину решения и базу-свидетеля (если составность доказана)
    - Разложение n - 1 = 2^k * q (если выполнялось)
    - Упорядоченный список фактически проверенных баз
    """

    schema_version: str = Field(
        VERDICT_SCHEMA_VERSION,
        pattern="^1$",
        description="Версия схемы для tracking совместимости",
    )
    n: int = Field(..., ge=0, le=U64_MAX, description="Тестируемое число")
    verdict: Primality = Field(..., description="PRIME/COMPOSITE")
    reason: VerdictReason = Field(..., description="Причина решения")
    witness: Optional[int] = Field(
        None, ge=2, description="База, доказавшая составность (nullable)"
    )
    k: Optional[int] = Field(
        None, ge=1, le=63, description="Степень двойки в n - 1 (nullable)"
    )
    q: Optional[int] = Field(
        None, ge=1, le=U64_MAX, description="Нечётная часть n - 1 (nullable)"
    )
    witnesses_checked: tuple[int, ...] = Field(
        (), description="Базы, для которых выполнялась проверка"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_consistency(self) -> "PrimalityVerdict":
        """Согласованность verdict / reason / witness / разложения"""
        if self.reason == VerdictReason.WITNESS:
            if self.verdict != Primality.COMPOSITE:
                raise ValueError("reason 'witness' requires verdict COMPOSITE")
            if self.witness is None:
                raise ValueError("reason 'witness' requires a witness base")
        elif self.witness is not None:
            raise ValueError(f"witness must be None for reason '{self.reason.value}'")

        if self.reason == VerdictReason.SMALL_PRIME and self.verdict != Primality.PRIME:
            raise ValueError("reason 'small_prime' requires verdict PRIME")
        if self.reason == VerdictReason.TRIVIAL_COMPOSITE and self.verdict != Primality.COMPOSITE:
            raise ValueError("reason 'trivial_composite' requires verdict COMPOSITE")
        if (
            self.reason == VerdictReason.ALL_WITNESSES_INCONCLUSIVE
            and self.verdict != Primality.PRIME
        ):
            raise ValueError("reason 'all_witnesses_inconclusive' requires verdict PRIME")

        if (self.k is None) != (self.q is None):
            raise ValueError("k and q must be both set or both None")
        if self.q is not None and self.q % 2 == 0:
            raise ValueError(f"q must be odd, got {self.q}")
        if self.k is not None and (self.q << self.k) != self.n - 1:
            raise ValueError(f"2^k * q must equal n - 1, got k={self.k}, q={self.q}, n={self.n}")

        return self

    @property
    def is_prime(self) -> bool:
        """True если verdict == PRIME"""
        return self.verdict == Primality.PRIME
