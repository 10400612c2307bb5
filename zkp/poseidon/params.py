"""
Poseidon 순열 파라미터
========================

너비 t로부터 순열에 필요한 모든 상수를 도출한다.

  PoseidonParams = {
      t:               상태 너비
      alpha:           S-box 지수 (5)
      num_f:           전체 라운드 수 F (57)
      num_p:           부분 라운드 수 P (8)
      mds_matrix:      t×t FR 행렬
      round_constants: 길이 t·(F+P)의 FR 리스트 (라운드 우선 순서)
  }

파라미터는 생성 시 한 번 만들어지고 이후 변경되지 않는다.
상수 테이블은 참조로 전달받아 읽기만 하며, 파싱된 FR 원소는
파라미터 객체가 소유한다.

**과거 동작 재현 스위치**:
  이전 버전의 출력값을 재현하기 위한 세 가지 스위치가 있다.
  기본값은 모두 꺼져 있으며, PoseidonParams.legacy(t)는 세 개를 모두 켠다.

  - truncated_round_constants: 라운드 상수를 t개만 적재한다.
    두 번째 라운드의 ARK에서 RoundConstantsError가 발생한다.
  - broadcast_full_sbox: 전체 라운드 S-box가 각 슬롯 대신
    state[0]에서 다시 계산한 값을 모든 슬롯에 기록한다.
  - legacy_round_schedule: 전체/부분 라운드 경계를
    r < P/2 또는 r > P/2 + F 로 판정한다.

사용 예시:
    >>> params = PoseidonParams(3)
    >>> len(params.round_constants)   # 3 · 65 = 195
    >>> legacy = PoseidonParams.legacy(3)
    >>> len(legacy.round_constants)   # 3
"""

import logging

from zkp.poseidon.field import parse_fr
from zkp.poseidon.constants import (
    ALPHA,
    NUM_FULL_ROUNDS,
    NUM_PARTIAL_ROUNDS,
    constants,
)


logger = logging.getLogger(__name__)


class PoseidonConfigError(ValueError):
    """파라미터 구성 오류 (잘못된 너비, 손상된 상수 문자열, 차원 불일치)."""


class RoundConstantsError(IndexError):
    """ARK가 라운드 상수 테이블의 범위를 벗어난 인덱스를 요구했다."""


def _parse_entry(literal, table_name, t, position):
    """상수 테이블 항목 하나를 파싱한다. 실패하면 위치를 포함한 구성 오류."""
    try:
        return parse_fr(literal)
    except ValueError as exc:
        raise PoseidonConfigError(
            f"{table_name}[{t}]{position}의 상수를 파싱할 수 없습니다: {literal!r}"
        ) from exc


def load_constants(t, num_f, num_p, table=None, truncated=False):
    """너비 t의 MDS 행렬과 라운드 상수를 테이블에서 읽어 FR로 파싱한다.

    Args:
        t: 상태 너비 (테이블의 유효한 색인이어야 함)
        num_f: 전체 라운드 수 F
        num_p: 부분 라운드 수 P
        table: (라운드 상수 테이블, MDS 테이블). None이면 constants()
        truncated: True이면 라운드 상수를 t개만 읽는다 (이전 버전 동작)

    Returns:
        tuple: (mds, round_constants)
            mds: t×t FR 행렬 (list[list[FR]])
            round_constants: list[FR]

    Raises:
        PoseidonConfigError: t가 테이블 범위를 벗어나거나,
                             항목이 부족하거나, 파싱에 실패할 때
    """
    if table is None:
        table = constants()
    c_strij, m_strij = table

    if isinstance(t, bool) or not isinstance(t, int) or t < 1:
        raise PoseidonConfigError(f"너비 t는 1 이상의 정수여야 합니다: {t!r}")
    try:
        c_str = c_strij[t]
        m_str = m_strij[t]
    except (IndexError, KeyError) as exc:
        raise PoseidonConfigError(f"상수 테이블에 너비 {t}가 없습니다") from exc

    count = t if truncated else t * (num_f + num_p)
    if len(c_str) < count:
        raise PoseidonConfigError(
            f"너비 {t}의 라운드 상수가 {len(c_str)}개뿐입니다 (필요: {count})"
        )
    round_constants = [
        _parse_entry(c_str[i], "round_constants", t, f"[{i}]")
        for i in range(count)
    ]

    if len(m_str) != t or any(len(row) != t for row in m_str):
        raise PoseidonConfigError(f"너비 {t}의 MDS 행렬이 {t}×{t}가 아닙니다")
    mds = [
        [_parse_entry(m_str[i][j], "mds", t, f"[{i}][{j}]") for j in range(t)]
        for i in range(t)
    ]

    return mds, round_constants


class PoseidonParams:
    """Poseidon 순열 파라미터.

    속성:
        t: 상태 너비
        alpha: S-box 지수
        num_f: 전체 라운드 수 F
        num_p: 부분 라운드 수 P
        mds_matrix: t×t FR 행렬
        round_constants: FR 리스트 (기본 모드에서 길이 t·(F+P))
        truncated_round_constants, broadcast_full_sbox, legacy_round_schedule:
            과거 동작 재현 스위치 (모듈 설명 참고)
    """

    def __init__(self, t, table=None, truncated_round_constants=False,
                 broadcast_full_sbox=False, legacy_round_schedule=False):
        """너비 t의 파라미터를 상수 테이블에서 생성한다.

        Args:
            t: 상태 너비
            table: (라운드 상수 테이블, MDS 테이블). None이면 전역 테이블
            truncated_round_constants: 라운드 상수를 t개만 적재
            broadcast_full_sbox: 전체 라운드 S-box를 state[0] 기준으로 계산
            legacy_round_schedule: 이전 버전의 라운드 경계 사용

        Raises:
            PoseidonConfigError: 상수 적재 또는 검증 실패
        """
        self.t = t
        self.alpha = ALPHA
        self.num_f = NUM_FULL_ROUNDS
        self.num_p = NUM_PARTIAL_ROUNDS
        self.truncated_round_constants = truncated_round_constants
        self.broadcast_full_sbox = broadcast_full_sbox
        self.legacy_round_schedule = legacy_round_schedule

        self.mds_matrix, self.round_constants = load_constants(
            t, self.num_f, self.num_p,
            table=table, truncated=truncated_round_constants,
        )
        self.validate()
        logger.debug(
            "PoseidonParams(t=%d): MDS %d×%d, 라운드 상수 %d개",
            t, t, t, len(self.round_constants),
        )

    @classmethod
    def legacy(cls, t, table=None):
        """이전 버전 동작 스위치 세 개를 모두 켠 파라미터를 만든다."""
        return cls(
            t, table=table,
            truncated_round_constants=True,
            broadcast_full_sbox=True,
            legacy_round_schedule=True,
        )

    @classmethod
    def from_tables(cls, t, round_constants, mds_matrix, **switches):
        """외부에서 받은 10진수 문자열 상수로 파라미터를 만든다.

        전역 테이블과 같은 파싱·검증 경로를 거친다.

        Args:
            t: 상태 너비
            round_constants: 10진수 문자열 리스트
            mds_matrix: t×t 10진수 문자열 행렬
            **switches: __init__의 과거 동작 재현 스위치

        Raises:
            PoseidonConfigError: 상수 적재 또는 검증 실패
        """
        table = ({t: tuple(round_constants)},
                 {t: tuple(tuple(row) for row in mds_matrix)})
        params = cls(t, table=table, **switches)
        # 외부 테이블은 남는 항목 없이 정확한 길이여야 한다
        if len(round_constants) != len(params.round_constants):
            raise PoseidonConfigError(
                f"라운드 상수 개수가 맞지 않습니다: {len(round_constants)} "
                f"(기대값: {len(params.round_constants)})"
            )
        return params

    @property
    def width(self):
        return self.t

    @property
    def num_rounds(self):
        """총 라운드 수 F + P."""
        return self.num_f + self.num_p

    def validate(self):
        """차원 불변식을 검사한다.

        - mds_matrix는 t×t
        - (기본 모드) len(round_constants) == t·(F+P)

        Raises:
            PoseidonConfigError: 불변식 위반
        """
        t = self.t
        if len(self.mds_matrix) != t or any(len(row) != t for row in self.mds_matrix):
            raise PoseidonConfigError(f"MDS 행렬은 {t}×{t}이어야 합니다")
        if not self.truncated_round_constants:
            expected = t * self.num_rounds
            if len(self.round_constants) != expected:
                raise PoseidonConfigError(
                    f"라운드 상수는 t·(F+P) = {expected}개여야 합니다: "
                    f"{len(self.round_constants)}"
                )

    def __repr__(self):
        return (f"PoseidonParams(t={self.t}, alpha={self.alpha}, "
                f"F={self.num_f}, P={self.num_p})")
