"""
Poseidon 기반 모듈: 유한체(Finite Field) 원소
==============================================

Poseidon 순열이 동작하는 유한체 FR을 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field). ark_bn254의 Fr,
  circom/snarkjs의 Poseidon과 같은 필드이다.
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - p mod 5 ≠ 1 이므로 x ↦ x^5 는 FR 위의 전단사(bijection)

**상수 파싱**:
  라운드 상수와 MDS 행렬은 10진수 문자열 테이블로 주어진다.
  parse_fr는 이 문자열을 FR 원소로 변환한다.

사용 예시:
    >>> from zkp.poseidon.field import FR, parse_fr, pow5
    >>> a = parse_fr("3")
    >>> pow5(a)          # FR(243)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.
    원소는 불변(immutable)이므로 값 복사와 참조 공유가 동일하게 동작한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


def parse_fr(literal):
    """10진수 문자열을 FR 원소로 파싱한다.

    빈 문자열, 숫자가 아닌 문자, 불필요한 선행 0("007")은 거부한다.
    p 이상의 값은 p로 나눈 나머지로 축소된다.

    Args:
        literal: 10진수 문자열 (예: "21888242871839275222246405745257275088548364400416034343698204186575808495616")

    Returns:
        FR: 파싱된 필드 원소

    Raises:
        ValueError: 올바른 10진수 표기가 아닐 때

    예시:
        >>> parse_fr("42")     # FR(42)
        >>> parse_fr("0x2a")   # ValueError
    """
    if not isinstance(literal, str):
        raise ValueError(f"10진수 문자열이 필요합니다: {literal!r}")
    # str.isdigit()은 '²' 같은 유니코드 숫자도 허용하므로 ASCII로 한정
    if not literal or not (literal.isascii() and literal.isdigit()):
        raise ValueError(f"올바른 10진수 문자열이 아닙니다: {literal!r}")
    if len(literal) > 1 and literal[0] == "0":
        raise ValueError(f"선행 0은 허용되지 않습니다: {literal!r}")
    return FR(int(literal) % CURVE_ORDER)


def pow5(x):
    """S-box x ↦ x^5 를 계산한다.

    일반 거듭제곱 대신 제곱 두 번과 곱셈 한 번으로 계산한다:
        x² → x⁴ → x⁴·x

    Args:
        x: FR 원소

    Returns:
        FR: x^5
    """
    x2 = x * x
    x4 = x2 * x2
    return x4 * x
