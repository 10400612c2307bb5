"""
Poseidon 데이터 직렬화/역직렬화 헬퍼
======================================

JSON에 저장 가능한 형태로 Poseidon 객체를 변환한다.
FR 원소는 10진수 문자열로 표현한다 (상수 테이블과 같은 형식).
"""

from zkp.poseidon.field import FR
from zkp.poseidon.params import PoseidonParams, PoseidonConfigError


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


# ─── FR list ───

def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


def deserialize_fr_list(data):
    """list[str] → list[FR]"""
    return [FR(int(s)) for s in data]


# ─── PoseidonParams ───

def serialize_params(params):
    """PoseidonParams → dict"""
    return {
        "t": params.t,
        "alpha": params.alpha,
        "num_f": params.num_f,
        "num_p": params.num_p,
        "mds": [serialize_fr_list(row) for row in params.mds_matrix],
        "round_constants": serialize_fr_list(params.round_constants),
        # 이전 버전 동작 스위치
        "truncated_round_constants": params.truncated_round_constants,
        "broadcast_full_sbox": params.broadcast_full_sbox,
        "legacy_round_schedule": params.legacy_round_schedule,
    }


def deserialize_params(data):
    """dict → PoseidonParams

    상수는 PoseidonParams.from_tables를 거쳐 다시 파싱·검증된다.
    alpha, num_f, num_p가 이 패키지의 고정값과 다르면 거부한다.
    """
    params = PoseidonParams.from_tables(
        data["t"],
        data["round_constants"],
        data["mds"],
        truncated_round_constants=data.get("truncated_round_constants", False),
        broadcast_full_sbox=data.get("broadcast_full_sbox", False),
        legacy_round_schedule=data.get("legacy_round_schedule", False),
    )
    for key in ("alpha", "num_f", "num_p"):
        if key in data and data[key] != getattr(params, key):
            raise PoseidonConfigError(
                f"{key}={data[key]}는 지원하지 않습니다 (고정값: {getattr(params, key)})"
            )
    return params


# ─── Trace ───

def serialize_trace(trace):
    """list[list[FR]] (라운드별 상태) → list[list[str]]"""
    if trace is None:
        return None
    return [serialize_fr_list(state) for state in trace]


# ─── 표시용 ───

def fr_short(val):
    """FR → 축약 문자열"""
    if val is None:
        return "None"
    s = str(int(val))
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]
