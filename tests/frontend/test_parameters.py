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
"""Unit tests for the parameters.py module."""

import pytest
import numpy as np
import sympy

from qcircuits.parameters import (
    par_is_symbolic,
    par_str,
    par_evaluate,
    par_substitute,
    par_free_symbols,
    params,
    FreeParameter,
    par_funcs as pf,
    ParameterError,
)


pytestmark = pytest.mark.frontend


SCALAR_TEST_VALUES = [3, 0.14, 4.2 + 0.5j]
TEST_VALUES = SCALAR_TEST_VALUES + [np.array([0.1, 0.987654])]


class TestParameter:
    """Basic parameter functionality."""

    @pytest.mark.parametrize("r", TEST_VALUES)
    def test_par_is_symbolic(self, r):
        """Recognizing symbolic parameters."""
        p = FreeParameter("x")

        assert not par_is_symbolic(r)
        assert par_is_symbolic(p)
        assert par_is_symbolic(pf.sin(p))
        assert par_is_symbolic(p + r)
        assert par_is_symbolic(p * r)

    def test_par_is_symbolic_arrays(self):
        """Object arrays are symbolic iff one of their elements is."""
        p = FreeParameter("x")

        a = np.array([[0.1, 3], [0.3, p]])
        assert a.dtype == object
        assert par_is_symbolic(a)

        a = np.array([[0.1, 3], [0.3, 2]], dtype=object)
        assert not par_is_symbolic(a)

        a = np.array([[0.1, 3], [0.3, 2]])
        assert not par_is_symbolic(a)

    def test_sympy_numbers_are_not_symbolic(self):
        """Sympy expressions without free symbols are numerical parameters."""
        assert not par_is_symbolic(sympy.pi / 2)
        assert not par_is_symbolic(pf.sin(sympy.Integer(1)))

    def test_par_str(self):
        """String representations of parameters."""
        a = 0.1234567
        x = FreeParameter("x")

        assert par_str(a) == "0.1235"
        assert par_str(x) == "{x}"
        assert par_str(2 * x) == "2*{x}"
        assert par_str("0101") == "'0101'"

    def test_params(self):
        """The params function creates free parameters by name."""
        a = params("a")
        assert isinstance(a, FreeParameter)
        assert a.name == "a"

        b, c = params("b", "c")
        assert (b.name, c.name) == ("b", "c")

        assert params("a") == a


class TestEvaluate:
    """Evaluating and substituting parameters."""

    @pytest.mark.parametrize("r", TEST_VALUES)
    def test_par_evaluate_numbers(self, r):
        """Numerical parameters are returned as-is."""
        assert np.all(par_evaluate(r) == r)
        assert par_evaluate([r, r])[1] is r

    def test_par_evaluate_sympy_numbers(self):
        """Sympy numbers are converted to Python numbers."""
        res = par_evaluate(sympy.pi / 2)
        assert isinstance(res, float)
        assert res == pytest.approx(np.pi / 2)

        res = par_evaluate(sympy.I * 2)
        assert isinstance(res, complex)
        assert res == pytest.approx(2j)

    def test_par_evaluate_free_parameter(self):
        """Evaluating an unresolved free parameter raises an error."""
        x = FreeParameter("x")
        with pytest.raises(ParameterError, match="unresolved symbolic parameter"):
            par_evaluate([0.1, pf.cos(x)])

    def test_par_evaluate_object_array(self):
        """Object arrays without free symbols are evaluated elementwise."""
        a = np.array([[sympy.Integer(1), 0], [0, sympy.I]], dtype=object)
        res = par_evaluate(a)
        assert res.dtype != object
        assert np.allclose(res, np.diag([1, 1j]))

    @pytest.mark.parametrize("key", ["x", FreeParameter("x")])
    def test_par_substitute(self, key):
        """Values can be keyed by the free parameter or by its name."""
        x, y = params("x", "y")
        expr = 2 * x + y

        res = par_substitute(expr, {key: 0.5})
        assert par_is_symbolic(res)
        assert par_free_symbols(res) == {y}

        res = par_substitute(res, {"y": 1})
        assert not par_is_symbolic(res)
        assert res == pytest.approx(2)

    def test_par_substitute_leaves_numbers(self):
        """Numerical parameters are not affected by substitution."""
        assert par_substitute(0.3, {"x": 1}) == 0.3

    def test_par_substitute_array(self):
        """Object arrays are substituted elementwise."""
        x = FreeParameter("x")
        a = np.array([[pf.cos(x), 0], [0, 1]])
        res = par_substitute(a, {"x": 0})
        assert not par_is_symbolic(res)
        assert np.allclose(par_evaluate(res), np.identity(2))

    def test_par_free_symbols(self):
        """Free symbols of parameters and object arrays."""
        x, y = params("x", "y")
        assert par_free_symbols(0.2) == set()
        assert par_free_symbols(x * y) == {x, y}
        assert par_free_symbols(np.array([x, 1, y])) == {x, y}
