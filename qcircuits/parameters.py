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
The classes and functions in this module represent parameters passed to the
quantum operations represented by :class:`~.Operation` subclasses.

Parameter types
---------------

There are two basic types of parameters:

1. **Numerical parameters**: An immediate, immutable numerical object
   (float, complex, int, numerical array).
   Implemented as-is, not encapsulated in a class.

2. **Free parameters**: A *parametrized circuit template* is a circuit that
   depends on a number of unbound (free) parameters. These parameters need to be
   substituted by numerical values, using :meth:`.Circuit.evaluate`, before
   the matrix of an operation can be computed. Represented by :class:`FreeParameter`
   instances, which can be created with :func:`params`.

:class:`.Operation` subclass constructors accept parameters that are functions or algebraic
combinations of any number of these basic parameter types. This is made possible by
:class:`FreeParameter` inheriting from :class:`sympy.Symbol`. The core never simplifies
these expressions; it only substitutes values for the free parameters they contain.

.. note:: Binary arithmetic operations between sympy symbols and numpy arrays produces numpy object arrays containing sympy symbols.


Parameter lifecycle
-------------------

* An Operation instance is constructed with some (possibly symbolic) arguments,
  which are stored in :attr:`.Operation.p`.

* :meth:`.Operation.evaluate` returns a copy of the operation where every parameter
  has been passed through :func:`par_substitute`. Parameters without free symbols
  left are converted to plain Python numbers.

* :meth:`.Operation.matrix` calls :func:`par_evaluate` on the parameters, which raises
  :class:`ParameterError` if any of them still depends on a free parameter.
"""
# pylint: disable=too-many-ancestors,unused-argument

import collections.abc
import types

import numpy as np
import sympy
import sympy.functions as sf


par_funcs = types.SimpleNamespace(**{name: getattr(sf, name) for name in dir(sf) if name[0] != "_"})
"""SimpleNamespace: Namespace of mathematical functions for manipulating Parameters.
Consists of all :mod:`sympy.functions` public members.
"""


class ParameterError(RuntimeError):
    """Exception raised when the Parameter classes encounter an illegal operation.

    E.g., trying to compute the matrix of a gate with an unresolved free parameter.
    """


def is_object_array(p):
    """Returns True iff p is an object array.

    Args:
        p (Any): object to be checked

    Returns:
        bool: True iff p is a NumPy object array
    """
    return isinstance(p, np.ndarray) and p.dtype == object


def _to_number(p):
    """Converts a sympy expression without free symbols into a Python number."""
    val = complex(p)
    if val.imag == 0:
        return val.real
    return val


def par_is_symbolic(p):
    """Returns True iff p is a symbolic Operation parameter instance.

    A parameter is symbolic if it inherits :class:`sympy.Basic` and still
    contains free symbols. A NumPy object array is symbolic if any of its elements are.
    All other objects are considered not symbolic parameters.
    """
    if is_object_array(p):
        return any(par_is_symbolic(k) for k in p)
    return isinstance(p, sympy.Basic) and bool(p.free_symbols)


def par_evaluate(params):
    """Evaluate an Operation parameter sequence.

    Any parameters descending from :class:`sympy.Basic` are converted to Python numbers,
    others are returned as-is. NumPy object arrays are evaluated elementwise.

    Alternatively, evaluates a single parameter and returns its value.

    Args:
        params (Sequence[Any]): parameters to evaluate

    Returns:
        list[Any]: evaluated parameters

    Raises:
        ParameterError: if a parameter still depends on free parameters
    """
    scalar = False
    if not isinstance(params, collections.abc.Sequence) or isinstance(params, str):
        scalar = True
        params = [params]

    def do_evaluate(p):
        """Evaluates a single parameter."""
        if is_object_array(p):
            return np.array([do_evaluate(k) for k in p])

        if not isinstance(p, sympy.Basic):
            return p

        if p.free_symbols:
            raise ParameterError(
                "{}: unresolved symbolic parameter, substitute a value first.".format(par_str(p))
            )
        return _to_number(p)

    ret = list(map(do_evaluate, params))
    if scalar:
        return ret[0]
    return ret


def par_substitute(p, values):
    """Substitute values for the free parameters of an Operation parameter.

    Args:
        p (Any): Operation parameter
        values (Mapping[Union[FreeParameter, str], Any]): values of the free parameters,
            keyed either by the parameter itself or by its name

    Returns:
        Any: the parameter with the values substituted; a plain number if no free
        parameters remain
    """
    if is_object_array(p):
        return np.array([par_substitute(k, values) for k in p])

    if not isinstance(p, sympy.Basic):
        return p

    subs = {}
    for sym in p.free_symbols:
        for key, val in values.items():
            name = key if isinstance(key, str) else getattr(key, "name", None)
            if name == sym.name:
                subs[sym] = val
                break

    res = p.subs(subs, simultaneous=True)
    if res.free_symbols:
        return res
    return _to_number(res)


def par_free_symbols(p):
    """Free parameters an Operation parameter depends on.

    Args:
        p (Any): Operation parameter

    Returns:
        set[sympy.Symbol]: symbols the parameter depends on
    """
    ret = set()
    if is_object_array(p):
        for k in p:
            ret.update(par_free_symbols(k))
    elif isinstance(p, sympy.Basic):
        ret.update(p.free_symbols)
    return ret


def par_str(p):
    """String representation of the Operation parameter.

    Args:
        p (Any): Operation parameter

    Returns:
        str: string representation
    """
    if isinstance(p, np.ndarray):
        np.set_printoptions(precision=4)
        return str(p)
    if isinstance(p, sympy.Basic):
        return str(p)
    if isinstance(p, str):
        return repr(p)
    return "{:.4g}".format(p)  # scalar parameters


class FreeParameter(sympy.Symbol):
    """Named symbolic Operation parameter.

    Two free parameters with the same name are equal.

    Args:
        name (str): name of the free parameter
    """

    def _sympystr(self, printer):
        """Curly-brace notation.

        The Sympy printing system uses this method instead of __str__.
        """
        return "{{{}}}".format(self.name)


def params(*args):
    """Create and access free circuit parameters.

    Returns the named free parameters, creating them as needed.

    Args:
        *args (tuple[str]): name(s) of the free parameters to access

    Returns:
        FreeParameter, tuple[FreeParameter]: requested parameter(s)
    """
    ret = tuple(FreeParameter(name) for name in args)
    if len(ret) == 1:
        return ret[0]
    return ret
