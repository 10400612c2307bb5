"""
Poseidon 순열 (bn128 스칼라 필드)
==================================

사용 예시:
    >>> from zkp.poseidon import Poseidon, FR
    >>> Poseidon(2, [FR(1), FR(2)]).hash()
"""

from zkp.poseidon.field import FR, CURVE_ORDER, parse_fr, pow5
from zkp.poseidon.constants import (
    ALPHA,
    NUM_FULL_ROUNDS,
    NUM_PARTIAL_ROUNDS,
    MAX_WIDTH,
    constants,
)
from zkp.poseidon.params import (
    PoseidonParams,
    PoseidonConfigError,
    RoundConstantsError,
    load_constants,
)
from zkp.poseidon.permutation import Poseidon, poseidon_hash
