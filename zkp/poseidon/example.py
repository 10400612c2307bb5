"""
Poseidon 순열 데모: t = 2, 초기 상태 [1, 2]
=============================================

이 스크립트는 Poseidon 순열의 전체 흐름을 시연한다.

실행:
    python -m zkp.poseidon.example

흐름:
    1. 파라미터 생성 (상수 테이블 → FR)
    2. 순열 계산 (F+P 라운드, 라운드별 트레이스 기록)
    3. 결정성 확인 (새 엔진으로 다시 계산)
    4. 이전 버전 동작 재현 (PoseidonParams.legacy)
"""

from zkp.poseidon.field import FR
from zkp.poseidon.params import PoseidonParams, RoundConstantsError
from zkp.poseidon.permutation import Poseidon
from zkp.poseidon.serializers import fr_short


def main():
    print("=" * 60)
    print("  Poseidon Permutation Demo")
    print("  너비 t = 2, 초기 상태 [1, 2]")
    print("=" * 60)

    # ── 1. 파라미터 ──
    print("\n[1] 파라미터 생성...")
    params = PoseidonParams(2)
    print(f"    {params}")
    print(f"    라운드 상수 수: {len(params.round_constants)}")
    print("    MDS 행렬:")
    for row in params.mds_matrix:
        print(f"      [{', '.join(fr_short(x) for x in row)}]")

    # ── 2. 순열 ──
    print("\n[2] 순열 계산...")
    pos = Poseidon(2, [FR(1), FR(2)], params=params, record_trace=True)
    out = pos.hash()
    full = sum(1 for r in range(params.num_rounds) if pos.is_full_round(r))
    print(f"    전체 라운드 {full}회, 부분 라운드 {params.num_rounds - full}회")
    for r in (0, params.num_rounds // 2, params.num_rounds - 1):
        state = ", ".join(fr_short(x) for x in pos.trace[r])
        print(f"      라운드 {r:2d}: [{state}]")
    print(f"    출력: {int(out)}")

    # ── 3. 결정성 ──
    print("\n[3] 새 엔진으로 다시 계산...")
    again = Poseidon(2, [FR(1), FR(2)], params=params).hash()
    print(f"    결과 일치: {'✓' if again == out else '✗'}")

    # ── 4. 이전 버전 동작 ──
    # 라운드 상수를 t개만 적재하므로 두 번째 라운드에서 실패해야 한다.
    print("\n[4] 이전 버전 파라미터 (PoseidonParams.legacy)...")
    legacy = PoseidonParams.legacy(2)
    try:
        Poseidon(2, [FR(1), FR(2)], params=legacy).hash()
        print("    예상과 달리 성공")
    except RoundConstantsError as exc:
        print(f"    RoundConstantsError (예상대로 실패): {exc}")

    print("\n" + "=" * 60)
    return out


if __name__ == "__main__":
    main()
