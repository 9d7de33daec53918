"""
Saturation lock shared by the Region 1 and Region 2 models.
"""

from pysteamtoolbox.constants import SAT_EPS
from pysteamtoolbox.errors import SaturationLockError
from .region4 import in_saturation_band, psat


def assert_outside_saturation(region, T, P, sat_eps=SAT_EPS):
    """ Raises SaturationLockError if (T, P) is inside the saturation band """
    if in_saturation_band(T, P, sat_eps):
        raise SaturationLockError(
            f'Region {region} called on the saturation line (T={T} K, P={P} MPa, Psat={psat(T):.9g} MPa); '
            'supply a quality',
            name='pressure', value=P, bound=psat(T))
