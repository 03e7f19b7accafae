# Copyright 2019-2020 Xanadu Quantum Technologies Inc.

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
The QCircuits codebase is split into the quantum operations (:mod:`qcircuits.ops`),
the circuit representation (:mod:`qcircuits.circuit`), and the compilers that
decompose circuits into restricted gate sets (:mod:`qcircuits.compilers`).
"""
from . import ops
from ._version import __version__
from .circuit import Circuit, decompose
from .circuit_utils import Instruction, circuit_equivalence
from .parameters import FreeParameter, par_funcs as math, params

__all__ = [
    "Circuit",
    "Instruction",
    "FreeParameter",
    "params",
    "decompose",
    "circuit_equivalence",
    "version",
    "about",
]


def version():
    r"""
    Version number of QCircuits.

    Returns:
      str: package version number
    """
    return __version__


def about():
    """QCircuits information.

    Prints the installed version numbers for QCircuits and its dependencies,
    and some system info. Please include this information in bug reports.

    **Example:**

    .. code-block:: pycon

        >>> qcircuits.about()
        QCircuits: a Python library for modeling and decomposing qubit circuits.
        Copyright 2018-2020 Xanadu Quantum Technologies Inc.

        Python version:            3.9.6
        Platform info:             Linux-5.10.60.1-microsoft-standard-WSL2-x86_64-with-glibc2.31
        Installation path:         /home/qcircuits/
        QCircuits version:         0.3.0
        Numpy version:             1.19.5
        Scipy version:             1.7.2
        SymPy version:             1.9
        NetworkX version:          2.6.3
    """
    # pylint: disable=import-outside-toplevel
    import sys
    import platform
    import os
    import numpy
    import scipy
    import sympy
    import networkx

    # a QuTiP-style infobox
    print("\nQCircuits: a Python library for modeling and decomposing qubit circuits.")
    print("Copyright 2018-2020 Xanadu Quantum Technologies Inc.\n")

    print("Python version:            {}.{}.{}".format(*sys.version_info[0:3]))
    print("Platform info:             {}".format(platform.platform()))
    print("Installation path:         {}".format(os.path.dirname(__file__)))
    print("QCircuits version:         {}".format(__version__))
    print("Numpy version:             {}".format(numpy.__version__))
    print("Scipy version:             {}".format(scipy.__version__))
    print("SymPy version:             {}".format(sympy.__version__))
    print("NetworkX version:          {}".format(networkx.__version__))
