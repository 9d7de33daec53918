from .shared_fns import bisect_solve, clamp, convert_to_numpy, process_output
