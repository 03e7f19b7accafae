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
Default parameters, environment variables, fixtures, and common routines for the unit tests.
"""
# pylint: disable=redefined-outer-name
import os
import pytest

import numpy as np

np.random.seed(42)

from qcircuits import ops


# defaults
TOL = 1e-8
THETA = 0.43
PHI = -0.21
LAM = 1.17
GAMMA = 0.3


def pytest_configure(config):
    """Register the markers used by the test suite."""
    config.addinivalue_line("markers", "frontend: unit tests of the frontend")
    config.addinivalue_line("markers", "integration: tests combining several modules")


@pytest.fixture(scope="session")
def tol():
    """Numerical tolerance for equality tests."""
    return float(os.environ.get("TOL", TOL))


def random_unitary(n):
    """Haar-like random unitary of dimension n, from the QR decomposition
    of a complex Gaussian matrix."""
    A = np.random.normal(size=(n, n)) + 1j * np.random.normal(size=(n, n))
    Q, R = np.linalg.qr(A)
    return Q * (np.diag(R) / np.abs(np.diag(R)))


def sample_gates():
    """One numerical instance of every gate in the catalogue."""
    res = [cls() for cls in ops.zero_args_gates]
    res += [cls(THETA) for cls in ops.one_args_gates]
    res += [
        ops.Ugate(THETA, PHI, LAM, GAMMA),
        ops.GPhase(1, LAM),
        ops.GPhase(2, PHI),
        ops.QFTgate(2),
        ops.QFTgate(3),
        ops.CustomGate(random_unitary(2)),
        ops.CustomGate(random_unitary(4)),
    ]
    return res


def sample_controlled():
    """One numerical instance of every controlled gate alias."""
    res = []
    for func in ops.controlled_gates:
        if func is ops.CUgate:
            res.append(func(THETA, PHI, LAM, GAMMA))
        elif func in (ops.CPgate, ops.CRXgate, ops.CRYgate, ops.CRZgate):
            res.append(func(THETA))
        else:
            res.append(func())
    return res
