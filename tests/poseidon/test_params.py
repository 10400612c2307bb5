"""
Tests for Poseidon parameter construction: load_constants, PoseidonParams.

Covers:
- fixed algorithm constants and derived round count
- width consistency (t×t MDS, t·(F+P) round constants)
- idempotent construction
- truncated (historical) round-constant loading
- configuration errors: bad width, malformed strings, short tables
- PoseidonParams.from_tables
"""

import pytest
from zkp.poseidon.field import FR
from zkp.poseidon.constants import MAX_WIDTH, constants
from zkp.poseidon.params import (
    PoseidonParams,
    PoseidonConfigError,
    load_constants,
)


NUM_ROUNDS = 65


def make_table(t, rc=None, mds=None):
    """너비 t 하나만 담은 작은 테스트용 상수 테이블."""
    if rc is None:
        rc = [str(k + 1) for k in range(t * NUM_ROUNDS)]
    if mds is None:
        mds = [[str(i + j + 1) for j in range(t)] for i in range(t)]
    return {t: tuple(rc)}, {t: tuple(tuple(row) for row in mds)}


# ─────────────────────────────────────────────────────────────────────
# PoseidonParams
# ─────────────────────────────────────────────────────────────────────

class TestPoseidonParams:
    """PoseidonParams 기본 모드 테스트."""

    def test_fixed_values(self, params3):
        assert params3.t == 3
        assert params3.width == 3
        assert params3.alpha == 5
        assert params3.num_f == 57
        assert params3.num_p == 8
        assert params3.num_rounds == NUM_ROUNDS

    def test_switches_off_by_default(self, params3):
        assert params3.truncated_round_constants is False
        assert params3.broadcast_full_sbox is False
        assert params3.legacy_round_schedule is False

    @pytest.mark.parametrize("t", [1, 2, 3, 4, 8])
    def test_width_consistency(self, t):
        params = PoseidonParams(t)
        assert len(params.mds_matrix) == t
        assert all(len(row) == t for row in params.mds_matrix)
        assert len(params.round_constants) == t * (params.num_f + params.num_p)

    def test_elements_are_fr(self, params2):
        assert all(isinstance(c, FR) for c in params2.round_constants)
        assert all(isinstance(m, FR) for row in params2.mds_matrix for m in row)

    def test_parsed_from_global_table(self, params3):
        c_table, m_table = constants()
        assert params3.round_constants[0] == FR(int(c_table[3][0]))
        assert params3.round_constants[-1] == FR(int(c_table[3][-1]))
        assert params3.mds_matrix[2][1] == FR(int(m_table[3][2][1]))

    def test_idempotent(self):
        """같은 너비로 두 번 만든 파라미터는 원소별로 같다."""
        p1 = PoseidonParams(4)
        p2 = PoseidonParams(4)
        assert p1.mds_matrix == p2.mds_matrix
        assert p1.round_constants == p2.round_constants

    def test_owns_its_lists(self):
        p1 = PoseidonParams(2)
        p2 = PoseidonParams(2)
        assert p1.round_constants is not p2.round_constants
        assert p1.mds_matrix[0] is not p2.mds_matrix[0]

    def test_repr(self, params2):
        assert repr(params2) == "PoseidonParams(t=2, alpha=5, F=57, P=8)"


class TestLegacyParams:
    """PoseidonParams.legacy: 이전 버전 동작 재현."""

    def test_switches_on(self, legacy_params2):
        assert legacy_params2.truncated_round_constants is True
        assert legacy_params2.broadcast_full_sbox is True
        assert legacy_params2.legacy_round_schedule is True

    @pytest.mark.parametrize("t", [1, 2, 5])
    def test_truncated_round_constants(self, t):
        params = PoseidonParams.legacy(t)
        assert len(params.round_constants) == t

    def test_truncated_prefix_matches_full(self):
        full = PoseidonParams(3)
        legacy = PoseidonParams.legacy(3)
        assert legacy.round_constants == full.round_constants[:3]
        assert legacy.mds_matrix == full.mds_matrix


# ─────────────────────────────────────────────────────────────────────
# Configuration errors
# ─────────────────────────────────────────────────────────────────────

class TestConfigErrors:
    @pytest.mark.parametrize("t", [0, -1, MAX_WIDTH + 1, 100])
    def test_width_out_of_table(self, t):
        with pytest.raises(PoseidonConfigError):
            PoseidonParams(t)

    @pytest.mark.parametrize("t", ["2", 2.0, True, None])
    def test_width_not_int(self, t):
        with pytest.raises(PoseidonConfigError):
            PoseidonParams(t)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            PoseidonParams(0)

    def test_malformed_round_constant(self):
        rc = [str(k + 1) for k in range(2 * NUM_ROUNDS)]
        rc[7] = "12a"
        with pytest.raises(PoseidonConfigError, match="round_constants"):
            PoseidonParams(2, table=make_table(2, rc=rc))

    def test_malformed_mds_entry(self):
        mds = [["1", "2"], ["3", "0x4"]]
        with pytest.raises(PoseidonConfigError, match="mds"):
            PoseidonParams(2, table=make_table(2, mds=mds))

    def test_short_round_constant_table(self):
        rc = [str(k + 1) for k in range(2 * NUM_ROUNDS - 1)]
        with pytest.raises(PoseidonConfigError):
            PoseidonParams(2, table=make_table(2, rc=rc))

    def test_short_table_is_fine_when_truncated(self):
        params = PoseidonParams(2, table=make_table(2, rc=["5", "6"]),
                                truncated_round_constants=True)
        assert params.round_constants == [FR(5), FR(6)]

    def test_non_square_mds(self):
        mds = [["1", "2"], ["3"]]
        with pytest.raises(PoseidonConfigError):
            PoseidonParams(2, table=make_table(2, mds=mds))

    def test_mds_wrong_row_count(self):
        mds = [["1", "2"]]
        with pytest.raises(PoseidonConfigError):
            PoseidonParams(2, table=make_table(2, mds=mds))

    def test_validate_detects_mutation(self):
        params = PoseidonParams(2)
        params.round_constants = params.round_constants[:-1]
        with pytest.raises(PoseidonConfigError):
            params.validate()


# ─────────────────────────────────────────────────────────────────────
# load_constants / from_tables
# ─────────────────────────────────────────────────────────────────────

class TestLoadConstants:
    def test_custom_table(self):
        mds, rc = load_constants(2, 57, 8, table=make_table(2))
        assert mds == [[FR(1), FR(2)], [FR(2), FR(3)]]
        assert rc[0] == FR(1)
        assert len(rc) == 2 * NUM_ROUNDS

    def test_truncated(self):
        _, rc = load_constants(2, 57, 8, table=make_table(2), truncated=True)
        assert rc == [FR(1), FR(2)]

    def test_default_table(self):
        mds, rc = load_constants(1, 57, 8)
        assert len(mds) == 1
        assert len(rc) == NUM_ROUNDS


class TestFromTables:
    def test_builds_params(self):
        rc = [str(k) for k in range(1, 1 * NUM_ROUNDS + 1)]
        params = PoseidonParams.from_tables(1, rc, [["7"]])
        assert params.t == 1
        assert params.mds_matrix == [[FR(7)]]
        assert params.round_constants[64] == FR(65)

    def test_rejects_extra_constants(self):
        rc = [str(k) for k in range(1, 1 * NUM_ROUNDS + 2)]
        with pytest.raises(PoseidonConfigError):
            PoseidonParams.from_tables(1, rc, [["7"]])

    def test_rejects_missing_constants(self):
        rc = [str(k) for k in range(1, NUM_ROUNDS)]
        with pytest.raises(PoseidonConfigError):
            PoseidonParams.from_tables(1, rc, [["7"]])

    def test_switches_forwarded(self):
        params = PoseidonParams.from_tables(
            2, ["1", "2"], [["1", "2"], ["3", "4"]],
            truncated_round_constants=True, broadcast_full_sbox=True,
        )
        assert params.truncated_round_constants is True
        assert params.broadcast_full_sbox is True
        assert params.legacy_round_schedule is False
