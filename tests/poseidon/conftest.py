import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.poseidon.field import FR
from zkp.poseidon.params import PoseidonParams


# ── 테스트 상수 ──
SMOKE_WIDTH = 2
SMOKE_STATE = [1, 2]


@pytest.fixture(scope="session")
def params2():
    """너비 2 기본 파라미터."""
    return PoseidonParams(2)


@pytest.fixture(scope="session")
def params3():
    """너비 3 기본 파라미터."""
    return PoseidonParams(3)


@pytest.fixture(scope="session")
def legacy_params2():
    """너비 2, 이전 버전 동작 스위치를 모두 켠 파라미터."""
    return PoseidonParams.legacy(2)


@pytest.fixture
def smoke_state():
    """[FR(1), FR(2)]"""
    return [FR(x) for x in SMOKE_STATE]
