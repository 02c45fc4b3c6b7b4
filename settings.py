import os

# Longest side allowed for a loaded image (pixels); fixed bound on filter cost
MAX_DIM = 300

# Defaults offered by the UI for the parameterised algorithms
DEFAULT_THRESHOLD = 128
DEFAULT_NOISE_PROBABILITY = 0.05

LOG_LEVEL = os.getenv("FILTERLAB_LOG_LEVEL", "INFO")

DEFAULT_SAVE_NAME = "output.png"
