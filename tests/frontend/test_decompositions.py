# Copyright 2019 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
r"""Unit tests for the matrix utilities in decompositions.py"""
import pytest

import numpy as np

from qcircuits import decompositions as dec

from conftest import random_unitary


pytestmark = pytest.mark.frontend


X = np.array([[0, 1], [1, 0]], dtype=complex)
Z = np.diag([1, -1]).astype(complex)
H = np.array([[1, 1], [1, -1]], dtype=complex) / np.sqrt(2)


class TestUMatrix:
    """Tests for the generic single-qubit unitary"""

    def test_special_cases(self, tol):
        """Known gates in terms of U."""
        assert np.allclose(dec.umatrix(np.pi, 0, np.pi), X, atol=tol)
        assert np.allclose(dec.umatrix(np.pi / 2, 0, np.pi), H, atol=tol)
        assert np.allclose(dec.umatrix(0, 0, np.pi), Z, atol=tol)

    def test_global_phase(self, tol):
        """The fourth parameter is a global phase."""
        U = dec.umatrix(0.3, 0.4, 0.5)
        assert np.allclose(dec.umatrix(0.3, 0.4, 0.5, 0.7), np.exp(0.7j) * U, atol=tol)

    @pytest.mark.parametrize("seed", range(5))
    def test_u_parameters(self, seed, tol):
        """Parameters reconstructed from a random unitary reproduce it exactly."""
        np.random.seed(seed)
        U = random_unitary(2)
        assert np.allclose(dec.umatrix(*dec.u_parameters(U)), U, atol=tol)

    @pytest.mark.parametrize("U", [np.identity(2), X, Z, 1j * X, np.diag([1j, 1])])
    def test_u_parameters_degenerate(self, U, tol):
        """Diagonal and anti-diagonal matrices are handled."""
        assert np.allclose(dec.umatrix(*dec.u_parameters(U)), U, atol=tol)

    def test_u_parameters_shape(self):
        """Only 2x2 matrices have U parameters."""
        with pytest.raises(ValueError, match="Expected a 2x2 matrix"):
            dec.u_parameters(np.identity(4))


class TestMatrixFunctions:
    """Tests for the matrix helpers"""

    def test_pmatrix(self, tol):
        """Phase gate."""
        assert np.allclose(dec.pmatrix(np.pi / 2), np.diag([1, 1j]), atol=tol)

    def test_qft_matrix(self, tol):
        """The QFT on one qubit is the Hadamard gate."""
        assert np.allclose(dec.qft_matrix(1), H, atol=tol)
        F = dec.qft_matrix(3)
        assert dec.is_unitary(F)
        assert np.allclose(F[1, 1], np.exp(2j * np.pi / 8) / np.sqrt(8), atol=tol)

    def test_control_matrix(self):
        """Controlled matrices put the target in the trailing block."""
        CX = dec.control_matrix(1, X)
        assert np.allclose(CX, [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]])

        CCZ = dec.control_matrix(2, Z)
        assert np.allclose(CCZ, np.diag([1, 1, 1, 1, 1, 1, 1, -1]))

    def test_kron_power(self):
        """Kronecker powers."""
        assert np.allclose(dec.kron_power(X, 1), X)
        assert np.allclose(dec.kron_power(X, 3), np.kron(X, np.kron(X, X)))

    @pytest.mark.parametrize("p", [0, 1, 3])
    def test_matrix_power_integer(self, p, tol):
        """Integer powers are repeated products."""
        U = random_unitary(4)
        assert np.allclose(dec.matrix_power(U, p), np.linalg.matrix_power(U, p), atol=tol)

    def test_matrix_power_root(self, tol):
        """Square roots square to the original matrix."""
        U = random_unitary(4)
        V = dec.matrix_power(U, 0.5)
        assert np.allclose(V @ V, U, atol=tol)
        assert dec.is_unitary(V)

    def test_matrix_power_principal_branch(self, tol):
        """The square root of X is the principal one, SX."""
        SX = np.array([[1 + 1j, 1 - 1j], [1 - 1j, 1 + 1j]]) / 2
        assert np.allclose(dec.matrix_power(X, 0.5), SX, atol=tol)

    def test_is_unitary(self):
        """Unitarity check."""
        assert dec.is_unitary(H)
        assert not dec.is_unitary(2 * H)
        assert not dec.is_unitary(np.ones((2, 3)))


class TestEmbedMatrix:
    """Tests for embedding a matrix into a larger register"""

    def test_single_qubit(self, tol):
        """Qubit 1 is the most significant."""
        I = np.identity(2)
        assert np.allclose(dec.embed_matrix(X, [1], 2), np.kron(X, I), atol=tol)
        assert np.allclose(dec.embed_matrix(X, [2], 2), np.kron(I, X), atol=tol)

    def test_reversed_targets(self, tol):
        """Reversing the targets of CX exchanges control and target."""
        CX = dec.control_matrix(1, X)
        SWAP = np.array([[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]])
        assert np.allclose(dec.embed_matrix(CX, [2, 1], 2), SWAP @ CX @ SWAP, atol=tol)

    def test_non_adjacent(self, tol):
        """Targets need not be adjacent."""
        U = random_unitary(4)
        res = dec.embed_matrix(U, [1, 3], 3)
        SWAP23 = np.kron(
            np.identity(2), np.array([[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]])
        )
        expected = SWAP23 @ np.kron(U, np.identity(2)) @ SWAP23
        assert np.allclose(res, expected, atol=tol)

    def test_invalid(self):
        """The matrix must match the targets, which must fit in the register."""
        with pytest.raises(ValueError, match="does not act on"):
            dec.embed_matrix(X, [1, 2], 2)
        with pytest.raises(ValueError, match="do not fit"):
            dec.embed_matrix(X, [3], 2)
