"""
Poseidon 상수 테이블
=====================

알고리즘 고정 상수와, 너비(width) t로 색인되는 두 개의 10진수 문자열
테이블(라운드 상수, MDS 행렬)을 제공한다.

**고정 상수**:
  - ALPHA = 5               S-box 지수 (x ↦ x^5)
  - NUM_FULL_ROUNDS = 57    전체 라운드 수 F
  - NUM_PARTIAL_ROUNDS = 8  부분 라운드 수 P

**테이블 생성 규칙** (NUMS: nothing-up-my-sleeve):
  라운드 상수:
      c[t][r·t + i] = SHA-256(DOMAIN_ROUND ‖ t ‖ r ‖ i) mod p
  MDS 행렬 (코시 행렬, Cauchy matrix):
      M[t][i][j] = 1 / (x_i - y_j)
      x_i, y_j는 SHA-256(DOMAIN_MDS ‖ t ‖ 레이블 ‖ k) mod p 에서 뽑되
      모든 x, y가 서로 다르도록 중복은 건너뛴다.
  x, y가 모두 서로 다르면 코시 행렬의 모든 정방 부분행렬은 가역이므로
  MDS 성질을 만족한다.

**테이블 구조**:
  constants()는 (C, M)을 반환한다.
  - C[t]: 길이 t·(F+P)의 10진수 문자열 튜플
  - M[t]: t×t 10진수 문자열 튜플의 튜플
  색인 0은 빈 튜플이다 (너비로 직접 색인하기 위함).
  테이블은 프로세스당 한 번 생성되며 튜플이므로 변경할 수 없다.

사용 예시:
    >>> C, M = constants()
    >>> len(C[3])    # 3 · 65 = 195
    >>> len(M[3])    # 3
"""

import functools
import hashlib
import logging

from zkp.poseidon.field import CURVE_ORDER


logger = logging.getLogger(__name__)


# S-box 지수
ALPHA = 5

# 라운드 수
NUM_FULL_ROUNDS = 57
NUM_PARTIAL_ROUNDS = 8

# 테이블이 지원하는 최대 너비
MAX_WIDTH = 16

# 도메인 분리 태그
DOMAIN_ROUND = b"poseidon-bn254-round-constants"
DOMAIN_MDS = b"poseidon-bn254-mds"


def hash_to_field(domain, *words):
    """도메인 태그와 정수 워드들을 SHA-256으로 해싱해 필드 원소(int)를 얻는다.

    각 워드는 4바이트 빅엔디안으로 직렬화된다.
    256비트 해시를 p로 나눈 나머지를 사용한다 (Transcript와 같은 축소 방식).

    Args:
        domain: 바이트열 도메인 태그
        *words: 0 이상 2^32 미만의 정수들

    Returns:
        int: [0, p) 범위의 정수
    """
    hasher = hashlib.sha256()
    hasher.update(domain)
    for w in words:
        hasher.update(w.to_bytes(4, "big"))
    return int.from_bytes(hasher.digest(), "big") % CURVE_ORDER


def round_constant_strings(t, num_rounds=NUM_FULL_ROUNDS + NUM_PARTIAL_ROUNDS):
    """너비 t의 라운드 상수를 10진수 문자열 튜플로 생성한다.

    순서는 라운드 우선: 인덱스 r·t + i 가 r번째 라운드의 i번째 슬롯이다.
    """
    return tuple(
        str(hash_to_field(DOMAIN_ROUND, t, r, i))
        for r in range(num_rounds)
        for i in range(t)
    )


def _distinct_points(t, label, count, taken):
    """taken에 없는 서로 다른 필드 원소 count개를 뽑는다."""
    points = []
    k = 0
    while len(points) < count:
        value = hash_to_field(DOMAIN_MDS, t, label, k)
        k += 1
        if value in taken:
            continue
        taken.add(value)
        points.append(value)
    return points


def mds_strings(t):
    """너비 t의 코시 MDS 행렬을 10진수 문자열로 생성한다.

    Returns:
        tuple: t개의 행, 각 행은 t개의 10진수 문자열
    """
    taken = set()
    xs = _distinct_points(t, 0, t, taken)
    ys = _distinct_points(t, 1, t, taken)

    rows = []
    for x in xs:
        # 1/(x - y) = (x - y)^(p-2)  (페르마 소정리)
        rows.append(tuple(
            str(pow((x - y) % CURVE_ORDER, CURVE_ORDER - 2, CURVE_ORDER))
            for y in ys
        ))
    return tuple(rows)


@functools.lru_cache(maxsize=None)
def constants():
    """프로세스 전역 상수 테이블 (C, M)을 반환한다.

    처음 호출될 때 한 번 생성되고, 이후에는 같은 객체를 돌려준다.

    Returns:
        tuple: (round_constants_table, mds_table)
            round_constants_table[t]: 길이 t·(F+P)의 문자열 튜플
            mds_table[t]: t×t 문자열 행렬
    """
    logger.debug("Poseidon 상수 테이블 생성: 너비 1..%d", MAX_WIDTH)
    c_table = [()]
    m_table = [()]
    for t in range(1, MAX_WIDTH + 1):
        c_table.append(round_constant_strings(t))
        m_table.append(mds_strings(t))
    return tuple(c_table), tuple(m_table)
