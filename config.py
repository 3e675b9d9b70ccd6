"""
Central Configuration for the per-user recommender selection.
Contains global constants, file paths, search bounds and default options.
Values defined here drive the behavior of evaluation, selection and the CLI.
"""

# --- File System Paths ---
DATA_DIR = 'ml-100k'
RATINGS_FILE = 'u.data'
RATINGS_SEPARATOR = '\t'

# --- Randomness ---
RANDOM_SEED = 42

# --- Selection Defaults ---
DEFAULT_METRIC = 'root_mean_squared_error'  # or 'mean_absolute_error'
DEFAULT_SPEED = 'extremely_slow'
DEFAULT_MINIMUM_COVERAGE = 0.5
DEFAULT_EVALUATION_PERCENTAGE = 1.0
SIGNIFICANCE_LEVEL = 0.05

# Reuse a similarity/factorization computed once on the full data model.
# The cached state sees the held-out ratings, so it stays off by default.
REUSE_STATE = False

# --- Neighbor-count search (user similarity family) ---
NEIGHBOR_SCAN_FACTORS = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]
NEIGHBOR_XATOL = 0.5  # neighbors are integers

# --- Feature/iteration-count search (latent factor family) ---
LATENT_MIN_FEATURES = 1
LATENT_MAX_FEATURES = 800
LATENT_MIN_ITERATIONS = 1
LATENT_MAX_ITERATIONS = 3
LATENT_INITIAL_GUESS = [120, 2]
LATENT_STEP_SIZES = [50, 1]
LATENT_MAX_OPTIMIZER_ITERATIONS = 10
LATENT_XATOL = 0.5

# --- Recommender strategies ---
ITEM_SIMILARITY_K = 40
LATENT_LEARNING_RATE = 0.005
LATENT_REGULARIZATION = 0.02
DEFAULT_RECOMMENDATION_COUNT = 10

# --- Penalty for evaluations below the minimum coverage ---
COVERAGE_PENALTY_BASE_EXPONENT = 1
COVERAGE_PENALTY_SLOPE = 3

# --- Logging ---
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
