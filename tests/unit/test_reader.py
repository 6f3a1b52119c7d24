"""Unit tests for hashing and window reads."""

import hashlib
import struct

import numpy as np
import pytest

from detfield.core.errors import InvalidWindowError
from detfield.core.reader import (
    DIGEST_SIZE,
    canonical_bytes,
    check_window,
    extract_window,
    field_slice,
    state_digest,
)
from detfield.core.state import FieldConfig, FieldState


@pytest.fixture
def state():
    return FieldState.from_config(FieldConfig(dim=6, seed=17, alpha=0.125))


class TestCanonicalBytes:
    """Tests for the hash preimage layout."""

    def test_length(self, state):
        assert len(canonical_bytes(state)) == 4 + 8 + 8 + 8 * 36

    def test_header_layout(self, state):
        state.step = 0x0102030405060708
        data = canonical_bytes(state)
        assert data[:4] == (6).to_bytes(4, "little")
        assert data[4:12] == bytes([8, 7, 6, 5, 4, 3, 2, 1])
        assert data[12:20] == struct.pack("<d", 0.125)

    def test_body_row_major_little_endian(self, state):
        data = canonical_bytes(state)
        body = data[20:]
        for i, v in enumerate(state.field.ravel()):
            assert body[8 * i:8 * i + 8] == struct.pack("<d", v)

    def test_non_contiguous_field(self):
        # A transposed (Fortran-ordered) array still hashes in [y, x] row-major order
        values = np.arange(16, dtype=np.float64).reshape(4, 4)
        s = FieldState(dim=4, alpha=0.1, field=np.asfortranarray(values))
        assert canonical_bytes(s)[20:] == b"".join(struct.pack("<d", v) for v in range(16))


class TestDigest:
    """Tests for the SHA-256 fingerprint."""

    def test_digest_is_sha256_of_preimage(self, state):
        assert state_digest(state) == hashlib.sha256(canonical_bytes(state)).digest()
        assert len(state_digest(state)) == DIGEST_SIZE

    def test_golden_step0(self, golden):
        s = FieldState.from_config(FieldConfig(dim=4, seed=1, alpha=0.1))
        assert state_digest(s).hex() == golden["hash0"]

    def test_step_changes_digest(self, state):
        before = state_digest(state)
        state.step += 1
        assert state_digest(state) != before

    def test_alpha_changes_digest(self):
        a = FieldState.from_config(FieldConfig(dim=4, seed=1, alpha=0.1))
        b = FieldState.from_config(FieldConfig(dim=4, seed=1, alpha=0.2))
        assert np.array_equal(a.field, b.field)
        assert state_digest(a) != state_digest(b)

    def test_negative_zero_distinct(self):
        a = FieldState(dim=4, alpha=0.1, field=np.zeros((4, 4)))
        b = FieldState(dim=4, alpha=0.1, field=np.zeros((4, 4)))
        b.field[0, 0] = -0.0
        assert state_digest(a) != state_digest(b)


class TestWindow:
    """Tests for window reads."""

    def test_full_window_is_full_field(self, state):
        assert field_slice(state, 0, 0, 6, 6) == state.field.ravel().tolist()

    def test_sub_window(self, state):
        win = extract_window(state, 1, 2, 3, 2)
        assert win.shape == (2, 3)
        assert np.array_equal(win, state.field[2:4, 1:4])

    def test_slice_row_major(self, state):
        values = field_slice(state, 4, 1, 2, 3)
        expected = [state.field[y, x] for y in range(1, 4) for x in range(4, 6)]
        assert values == expected

    def test_single_cell(self, state):
        assert field_slice(state, 5, 5, 1, 1) == [state.field[5, 5]]

    def test_window_is_a_copy(self, state):
        win = extract_window(state, 0, 0, 2, 2)
        win[0, 0] = 99.0
        assert state.field[0, 0] != 99.0

    @pytest.mark.parametrize(
        "x0,y0,w,h",
        [
            (6, 0, 1, 1),   # start out of range
            (0, 6, 1, 1),
            (0, 0, 0, 1),   # empty
            (0, 0, 1, 0),
            (5, 0, 2, 1),   # would need wrap
            (0, 3, 1, 4),
            (0, 0, 7, 7),
            (-1, 0, 2, 2),  # negative
        ],
    )
    def test_out_of_range_rejected(self, state, x0, y0, w, h):
        with pytest.raises(InvalidWindowError):
            field_slice(state, x0, y0, w, h)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidWindowError):
            check_window(8, 0.0, 0, 1, 1)

    def test_invalid_window_is_index_error(self):
        with pytest.raises(IndexError):
            check_window(4, 0, 0, 5, 1)
