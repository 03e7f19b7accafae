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
"""
This module implements the shared matrix functions that are
used to build gate matrices and to perform gate decompositions.

All matrices act on qubits in big-endian order: the first qubit of
an operation is the most significant bit of the basis state index.
"""
import numpy as np
from scipy.linalg import block_diag, fractional_matrix_power, schur

from . import configuration


def _atol(atol):
    if atol is None:
        return configuration.SESSION_CONFIG["numerics"]["atol"]
    return atol


def umatrix(theta, phi, lam, gamma=0.0):
    r"""Matrix of the generic single-qubit unitary gate.

    .. math::

        U(\theta, \phi, \lambda, \gamma) = e^{i\gamma}
        \begin{pmatrix}
            \cos(\theta/2) & -e^{i\lambda}\sin(\theta/2) \\
            e^{i\phi}\sin(\theta/2) & e^{i(\phi+\lambda)}\cos(\theta/2)
        \end{pmatrix}

    Args:
        theta (float): polar rotation angle
        phi (float): first phase
        lam (float): second phase
        gamma (float): global phase

    Returns:
        array[complex]: 2x2 unitary matrix
    """
    c = np.cos(theta / 2)
    s = np.sin(theta / 2)
    return np.exp(1j * gamma) * np.array(
        [[c, -np.exp(1j * lam) * s], [np.exp(1j * phi) * s, np.exp(1j * (phi + lam)) * c]],
        dtype=complex,
    )


def pmatrix(lam):
    r"""Matrix of the phase gate :math:`\text{diag}(1, e^{i\lambda})`.

    Args:
        lam (float): phase

    Returns:
        array[complex]: 2x2 diagonal matrix
    """
    return np.diag([1, np.exp(1j * lam)]).astype(complex)


def qft_matrix(num_qubits):
    r"""Matrix of the quantum Fourier transform on ``num_qubits`` qubits.

    .. math:: F_{jk} = \frac{1}{\sqrt{N}} e^{2\pi i jk/N}, \quad N = 2^n

    Args:
        num_qubits (int): number of qubits

    Returns:
        array[complex]: unitary matrix
    """
    dim = 2**num_qubits
    idx = np.arange(dim)
    return np.exp(2j * np.pi * np.outer(idx, idx) / dim) / np.sqrt(dim)


def control_matrix(num_controls, U):
    """Matrix of a controlled operation.

    The matrix is the identity on every basis state where one of the control
    qubits is off, and ``U`` on the trailing block where all of them are on.

    Args:
        num_controls (int): number of control qubits
        U (array): matrix of the target operation

    Returns:
        array[complex]: block diagonal matrix
    """
    dim = U.shape[0]
    return block_diag(np.identity(dim * (2**num_controls - 1)), U).astype(complex)


def kron_power(U, r):
    """The ``r``-fold Kronecker power of a matrix.

    Args:
        U (array): matrix
        r (int): number of factors, at least one

    Returns:
        array: Kronecker product of ``r`` copies of ``U``
    """
    res = U
    for _ in range(r - 1):
        res = np.kron(res, U)
    return res


def matrix_power(U, p, atol=None):
    """Principal power of a matrix.

    Integer exponents use repeated multiplication. Otherwise, normal matrices
    (in particular unitaries) are raised to the power through their Schur
    decomposition, which is then diagonal; eigenvalues on the negative real axis
    take the principal branch. Non-normal matrices fall back to
    :func:`scipy.linalg.fractional_matrix_power`.

    Args:
        U (array): square matrix
        p (float): exponent
        atol (float): tolerance used to recognize a diagonal Schur form

    Returns:
        array[complex]: matrix power
    """
    atol = _atol(atol)
    U = np.asarray(U, dtype=complex)

    if float(p).is_integer() and p >= 0:
        return np.linalg.matrix_power(U, int(p))

    T, Z = schur(U, output="complex")
    ev = np.diag(T)

    if not np.allclose(T, np.diag(ev), atol=atol):
        return np.asarray(fractional_matrix_power(U, float(p)), dtype=complex)

    # snap numerical noise so that -1 lands on the principal branch
    ev = np.where(np.abs(ev.imag) < atol, ev.real + 0j, ev)
    return Z @ np.diag(ev ** float(p)) @ Z.conj().T


def u_parameters(U, atol=None):
    r"""Parameters of the generic single-qubit gate matching a 2x2 unitary.

    Returns :math:`(\theta, \phi, \lambda, \gamma)` such that
    :func:`umatrix` reproduces ``U``. When :math:`\theta` is 0 the phase
    :math:`\phi` is fixed to zero, and when :math:`\theta` is :math:`\pi`
    the phase :math:`\lambda` is fixed to zero.

    Args:
        U (array): 2x2 unitary matrix
        atol (float): tolerance for recognizing diagonal and anti-diagonal matrices

    Returns:
        tuple[float]: theta, phi, lam, gamma
    """
    atol = _atol(atol)
    U = np.asarray(U, dtype=complex)

    if U.shape != (2, 2):
        raise ValueError("Expected a 2x2 matrix, got shape {}.".format(U.shape))

    c = np.abs(U[0, 0])
    s = np.abs(U[1, 0])
    theta = 2 * np.arctan2(s, c)

    if s < atol:
        gamma = np.angle(U[0, 0])
        phi = 0.0
        lam = np.angle(U[1, 1]) - gamma
    elif c < atol:
        gamma = np.angle(-U[0, 1])
        lam = 0.0
        phi = np.angle(U[1, 0]) - gamma
    else:
        gamma = np.angle(U[0, 0])
        phi = np.angle(U[1, 0]) - gamma
        lam = np.angle(-U[0, 1]) - gamma

    return float(theta), float(phi), float(lam), float(gamma)


def is_unitary(U, atol=None):
    """Checks if a matrix is unitary.

    Args:
        U (array): square matrix
        atol (float): absolute tolerance

    Returns:
        bool: True iff ``U`` is unitary
    """
    U = np.asarray(U)
    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        return False
    return np.allclose(U @ U.conj().T, np.identity(U.shape[0]), atol=_atol(atol))


def embed_matrix(U, targets, num_qubits):
    """Embeds the matrix of an operation into a larger register.

    Args:
        U (array): matrix acting on ``len(targets)`` qubits
        targets (Sequence[int]): 1-based qubit indices the matrix acts on, in order
        num_qubits (int): size of the register

    Returns:
        array[complex]: matrix acting on the whole register
    """
    k = len(targets)
    if U.shape != (2**k, 2**k):
        raise ValueError("Matrix of shape {} does not act on {} qubits.".format(U.shape, k))

    pos = [t - 1 for t in targets]
    if any(t < 0 or t >= num_qubits for t in pos):
        raise ValueError("Targets {} do not fit in {} qubits.".format(tuple(targets), num_qubits))

    rest = [q for q in range(num_qubits) if q not in pos]
    order = pos + rest

    full = np.kron(U, np.identity(2 ** (num_qubits - k))).reshape([2] * (2 * num_qubits))
    perm = list(np.argsort(order))
    full = full.transpose(perm + [num_qubits + j for j in perm])
    return full.reshape(2**num_qubits, 2**num_qubits).astype(complex)
