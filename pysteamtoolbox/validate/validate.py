from pysteamtoolbox.classes import class_dic
from pysteamtoolbox.constants import T_MIN, T_MAX, P_MIN, P_MAX, T_R5_MIN, P_R5_MAX
from pysteamtoolbox.errors import InvalidModeError, DomainRangeError

def validate_methods(names, variables):
    """ Converts string method names (eg 'Ph', 'iapws95') to their Enum members """
    variables = list(variables)
    for m, method in enumerate(names):
        if method not in class_dic:
            raise InvalidModeError(f"Unknown method family '{method}'")
        enum_cls = class_dic[method]
        if isinstance(variables[m], enum_cls):
            continue
        if isinstance(variables[m], str):
            try:
                variables[m] = enum_cls[variables[m].upper()]
                continue
            except KeyError:
                pass
        raise InvalidModeError(
            f"An incorrect {method} was specified: {variables[m]!r}. Choose from {[e.name for e in enum_cls]}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables

def check_temperature(T):
    if not T >= T_MIN:  # Also rejects NaN
        raise DomainRangeError(f'Temperature {T} K is below the minimum of {T_MIN} K', name='temperature', value=T, bound=T_MIN)
    if T > T_MAX:
        raise DomainRangeError(f'Temperature {T} K is above the maximum of {T_MAX} K', name='temperature', value=T, bound=T_MAX)

def check_pressure(P):
    if not P >= P_MIN:
        raise DomainRangeError(f'Pressure {P} MPa is below the minimum of {P_MIN} MPa', name='pressure', value=P, bound=P_MIN)
    if P > P_MAX:
        raise DomainRangeError(f'Pressure {P} MPa is above the maximum of {P_MAX} MPa', name='pressure', value=P, bound=P_MAX)

def check_envelope(T, P):
    """ Raises DomainRangeError naming the violated bound if (T, P) is unsupported """
    check_temperature(T)
    check_pressure(P)
    if T > T_R5_MIN and P > P_R5_MAX:
        raise DomainRangeError(
            f'Pressure {P} MPa is above the maximum of {P_R5_MAX} MPa for temperatures above {T_R5_MIN} K',
            name='pressure', value=P, bound=P_R5_MAX)

def check_quality(x):
    if not 0 <= x <= 1:
        raise DomainRangeError(f'Quality {x} must lie between 0 and 1', name='quality', value=x, bound=(0, 1))

def t_max_at(P):
    """ Highest supported temperature at pressure P (MPa) """
    return T_MAX if P <= P_R5_MAX else T_R5_MIN
