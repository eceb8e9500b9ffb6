"""
Tests for the Dipole record and its marshaling constructors.
"""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from sarvas_meg.physics.dipole import Dipole


class TestDipoleConstruction:
    """Tests for the canonical constructor."""

    def test_fields_are_normalized(self) -> None:
        d = Dipole((0, 0, 1), [1, 0, 0])

        assert d.position.dtype == np.float64
        assert d.position.tolist() == [0.0, 0.0, 1.0]
        assert d.moment.tolist() == [1.0, 0.0, 0.0]

    def test_is_immutable(self) -> None:
        d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])

        with pytest.raises(dataclasses.FrozenInstanceError):
            d.position = np.zeros(3)
        with pytest.raises(ValueError):
            d.moment[0] = 2.0

    def test_snapshot_of_caller_arrays(self) -> None:
        position = np.array([0.0, 0.0, 0.07])
        d = Dipole(position, [1.0, 0.0, 0.0])
        position[2] = 0.0

        assert d.position[2] == 0.07

    def test_wrong_length_rejected(self) -> None:
        with pytest.raises(ValueError, match="position"):
            Dipole([0.0, 0.07], [1.0, 0.0, 0.0])
        with pytest.raises(ValueError, match="moment"):
            Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0, 0.0])

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(TypeError):
            Dipole(["x", "y", "z"], [1.0, 0.0, 0.0])

    def test_bool_moment_rejected(self) -> None:
        with pytest.raises(TypeError):
            Dipole([0.0, 0.0, 0.07], [True, False, False])

    def test_equality_and_hash(self) -> None:
        a = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
        b = Dipole(np.array([0.0, 0.0, 0.07]), (1, 0, 0))
        c = Dipole([0.0, 0.0, 0.07], [0.0, 1.0, 0.0])

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_repr(self) -> None:
        d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
        assert repr(d) == "Dipole(position=[0.0, 0.0, 0.07], moment=[1.0, 0.0, 0.0])"


class TestDipoleMarshaling:
    """Tests for the alternate raw-data constructors."""

    def test_from_array(self) -> None:
        d = Dipole.from_array([0.0, 0.0, 0.07, 1.0, 0.0, 0.0])

        assert d == Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])

    def test_from_array_numpy(self) -> None:
        d = Dipole.from_array(np.arange(6, dtype=np.float32))

        assert d.position.tolist() == [0.0, 1.0, 2.0]
        assert d.moment.tolist() == [3.0, 4.0, 5.0]
        assert d.moment.dtype == np.float64

    @pytest.mark.parametrize("values", [[0.0] * 5, [0.0] * 7, [[0.0] * 3] * 2])
    def test_from_array_wrong_shape(self, values) -> None:
        with pytest.raises(ValueError, match=r"\(6,\)"):
            Dipole.from_array(values)

    def test_from_array_numeric_strings_rejected(self) -> None:
        """String buffers are refused rather than parsed."""
        with pytest.raises(TypeError):
            Dipole.from_array(["0", "0", "0.07", "1", "0", "0"])

    def test_from_arrays(self) -> None:
        d = Dipole.from_arrays(np.array([0.0, 0.0, 0.07]), np.array([1.0, 0.0, 0.0]))

        assert d == Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])

    def test_from_list(self) -> None:
        d = Dipole.from_list([[0.0, 0.0, 0.07], [1.0, 0.0, 0.0]])

        assert d == Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])

    def test_from_list_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="position, moment"):
            Dipole.from_list([[0.0, 0.0, 0.07]])

    def test_to_array_inverts_from_array(self) -> None:
        flat = [0.01, -0.02, 0.06, 0.3, 1.0, -0.2]

        np.testing.assert_array_equal(Dipole.from_array(flat).to_array(), flat)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
