"""
pysteamtoolbox
===================================

------------------------------------------------
A collection of Water and Steam Property Utilities
------------------------------------------------

Thermodynamic and transport properties of water and steam, built around the
IAPWS-IF97 industrial formulation with an alternate IAPWS-95 Helmholtz engine.

Includes functions to perform calculations including;

- IF97 Regions 1, 2, 3 and 5 single-phase properties, and the Region 4 saturation curve
- Saturated liquid and vapor properties, latent heat and vapor quality
- State resolution from any of the TP, Tx, Px, Ph, Ps or Ts property pairs
- IAPWS-95 density solution and properties
- Viscosity (IAPWS 2008) and thermal conductivity (IAPWS 2011)
- Interpolation in a tabulated compressed liquid dataset
- Tables of states as DataFrames, and comparisons against IF97 reference values

"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

submodules = [
    'classes',
    'constants',
    'errors',
    'iapws95',
    'if97',
    'shared_fns',
    'solver',
    'tables',
    'transport',
    'validate'
]

__all__ = submodules 

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pysteamtoolbox.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pysteamtoolbox' has no attribute '{name}'"
            )
