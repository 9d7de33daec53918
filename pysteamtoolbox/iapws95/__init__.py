from .iapws95 import pressure, dp_drho, properties, solve_density, state, R95, MAX_ITER
