from .errors import (WaterPropertiesError, DomainRangeError, SaturationLockError, BracketingError,
                     ConvergenceError, InvalidModeError, TableLookupError)
