from .validate import validate_methods, check_temperature, check_pressure, check_envelope, check_quality, t_max_at
