"""
Poseidon 순열 엔진
===================

고정 너비 t의 상태 벡터에 F+P 라운드를 적용하고 첫 번째 원소를 반환한다.

**라운드 구조**:
  각 라운드 r (0 ≤ r < F+P)은 세 단계로 이루어진다.

        [    ARK    ]    상태에 라운드 상수 더하기
         | | | | | |
        [    SBOX   ]    x ↦ x^5 (전체: 모든 슬롯, 부분: 슬롯 0만)
         | | | | | |
        [    MIX    ]    MDS 행렬 곱

  ARK:  state[i] += round_constants[r·t + i]
  MIX:  new_state[i] = Σ_j state[j] · MDS[i][j]

**전체/부분 라운드 선택**:
  기본:    r < F/2  또는  r ≥ F/2 + P  이면 전체 라운드
  과거:    r < P/2  또는  r > P/2 + F  이면 전체 라운드
           (params.legacy_round_schedule)

**수명**:
  엔진 하나는 상태 하나를 소유하며 한 번의 순열에만 사용된다.
  동시에 여러 순열을 계산하려면 호출마다 새 엔진을 만든다.

사용 예시:
    >>> from zkp.poseidon.field import FR
    >>> pos = Poseidon(2, [FR(1), FR(2)])
    >>> out = pos.hash()
"""

import logging

from zkp.poseidon.field import FR, pow5
from zkp.poseidon.params import (
    PoseidonParams,
    PoseidonConfigError,
    RoundConstantsError,
)


logger = logging.getLogger(__name__)


class Poseidon:
    """Poseidon 순열 엔진.

    속성:
        state: 현재 상태 (길이 t의 FR 리스트)
        params: PoseidonParams
        trace: record_trace=True일 때 라운드별 상태 사본 리스트, 아니면 None
    """

    def __init__(self, t, state, params=None, record_trace=False):
        """엔진을 초기화한다.

        Args:
            t: 상태 너비
            state: 초기 상태 (길이 t, FR 또는 int 원소)
            params: PoseidonParams. None이면 PoseidonParams(t)로 생성
            record_trace: True이면 라운드마다 상태 사본을 기록

        Raises:
            PoseidonConfigError: 상태 길이 또는 params.t가 t와 다를 때
        """
        if params is None:
            params = PoseidonParams(t)
        elif params.t != t:
            raise PoseidonConfigError(
                f"params.t={params.t}가 요청한 너비 {t}와 다릅니다"
            )
        if len(state) != t:
            raise PoseidonConfigError(
                f"초기 상태의 길이는 {t}이어야 합니다: {len(state)}"
            )

        self.state = [FR(x) for x in state]
        self.params = params
        self.trace = [] if record_trace else None
        self._consumed = False

    # ─── S-box ───

    def sbox_full(self):
        """전체 라운드 S-box: 모든 슬롯에 x ↦ x^5."""
        if self.params.broadcast_full_sbox:
            self._sbox_broadcast()
            return
        self.state = [pow5(x) for x in self.state]

    def _sbox_broadcast(self):
        # 이전 버전 출력 재현용. i = 0에서 state[0]이 x^5가 되고,
        # 이후 슬롯은 갱신된 state[0]로 계산되어 (x^5)^3이 된다.
        for i in range(self.params.t):
            temp = self.state[0]
            self.state[i] = self.state[0] * self.state[0]
            self.state[i] = self.state[0] * self.state[0]
            self.state[i] = self.state[i] * temp

    def sbox_partial(self):
        """부분 라운드 S-box: 슬롯 0에만 x ↦ x^5."""
        self.state[0] = pow5(self.state[0])

    def is_full_round(self, round_i):
        """round_i번째 라운드가 전체 라운드인지 판정한다."""
        num_f = self.params.num_f
        num_p = self.params.num_p
        if self.params.legacy_round_schedule:
            return round_i < num_p // 2 or round_i > num_p // 2 + num_f
        return round_i < num_f // 2 or round_i >= num_f // 2 + num_p

    def sbox(self, round_i):
        if self.is_full_round(round_i):
            self.sbox_full()
        else:
            self.sbox_partial()

    # ─── MDS ───

    def mix(self):
        """MDS 행렬 곱으로 상태를 교체한다.

        new_state는 mix 이전 상태에서 계산한 새 리스트이다.
        """
        t = self.params.t
        mds = self.params.mds_matrix
        new_state = []
        for i in range(t):
            acc = FR(0)
            for j in range(t):
                acc = acc + self.state[j] * mds[i][j]
            new_state.append(acc)
        self.state = new_state

    # ─── ARK ───

    def ark(self, ith):
        """ith번째 라운드의 라운드 상수를 상태에 더한다.

        Raises:
            RoundConstantsError: round_constants가 (ith+1)·t개보다 적을 때
                                 (truncated_round_constants 모드)
        """
        t = self.params.t
        rc = self.params.round_constants
        last = ith * t + t - 1
        if last >= len(rc):
            raise RoundConstantsError(
                f"라운드 {ith}: 라운드 상수 인덱스 {last}가 범위를 벗어났습니다 "
                f"(라운드 상수 {len(rc)}개)"
            )
        for i in range(t):
            self.state[i] = self.state[i] + rc[ith * t + i]

    # ─── 순열 ───

    def permute(self):
        """F+P 라운드를 모두 적용하고 최종 상태의 사본을 반환한다.

        Raises:
            RuntimeError: 이미 사용된 엔진일 때
            RoundConstantsError: 라운드 상수가 부족할 때
        """
        if self._consumed:
            raise RuntimeError("Poseidon 엔진은 한 번만 사용할 수 있습니다")
        self._consumed = True

        for i in range(self.params.num_rounds):
            self.ark(i)
            self.sbox(i)
            self.mix()
            if self.trace is not None:
                self.trace.append(list(self.state))

        logger.debug("Poseidon 순열 완료: t=%d, 라운드 %d",
                     self.params.t, self.params.num_rounds)
        return list(self.state)

    def hash(self):
        """순열을 적용하고 state[0]을 반환한다.

        Returns:
            FR: 순열 출력
        """
        return self.permute()[0]


def poseidon_hash(inputs, t=None, params=None):
    """새 엔진을 만들어 inputs를 초기 상태로 한 순열 출력을 계산한다.

    Args:
        inputs: 초기 상태 (FR 또는 int 리스트)
        t: 너비. None이면 len(inputs)
        params: PoseidonParams. None이면 PoseidonParams(t)

    Returns:
        FR: 순열 출력 state[0]

    예시:
        >>> poseidon_hash([1, 2])
    """
    if t is None:
        t = params.t if params is not None else len(inputs)
    return Poseidon(t, inputs, params=params).hash()
