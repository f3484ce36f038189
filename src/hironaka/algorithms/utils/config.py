"""Package-wide constants for the algebra kernels."""

FASTMATH = False  # Global flag for Numba's fastmath option

# Ordering used when a ring does not register one explicitly
DEFAULT_ORDERING = "degrevlex"

# The finite-field fast path only accepts characteristics below this bound
FAST_PATH_MAX_CHARACTERISTIC = 2**31

# Random linear combinations in IdealSheaf.simplify
SIMPLIFY_COEFFICIENT_RANGE = (1, 100)
SIMPLIFY_SEED = None  # None draws fresh entropy
