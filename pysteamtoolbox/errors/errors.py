#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pysteamtoolbox - A collection of Water and Steam Property Utilities
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

class WaterPropertiesError(ValueError):
    """ Base class for all errors raised by the property solver """

class DomainRangeError(WaterPropertiesError):
    """ Input or derived (T, P) falls outside the supported envelope.
        name: Quantity that is out of range ('temperature', 'pressure', ...)
        value: Offending value
        bound: Violated bound
    """
    def __init__(self, message, name=None, value=None, bound=None):
        super().__init__(message)
        self.name = name
        self.value = value
        self.bound = bound

class SaturationLockError(DomainRangeError):
    """ A single-phase region model was asked for a point inside the saturation band """

class BracketingError(WaterPropertiesError):
    """ An inverse-mode solve could not enclose a root """
    def __init__(self, message, mode=None, target=None):
        super().__init__(message)
        self.mode = mode
        self.target = target

class ConvergenceError(WaterPropertiesError):
    """ A Newton density iteration hit its cap without meeting tolerance """
    def __init__(self, message, iterations=None, residual=None):
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual

class InvalidModeError(WaterPropertiesError):
    """ Unrecognised input mode """

class TableLookupError(WaterPropertiesError):
    """ Requested point lies outside the compressed liquid table """
