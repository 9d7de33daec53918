from .state import ThermodynamicState, InputSpec, SolverContext, default_context, MODE_KEYS
from .solver import solve, compute_quality, water_table, compare_to_if97, compressed_liquid
