# src/sketchtabs/config.py

# Extensions a primary (sketch) file may carry
SKETCH_EXTENSIONS = ["ino", "pde"]

# Extensions of auxiliary source tabs
OTHER_ALLOWED_EXTENSIONS = ["c", "cpp", "h", "hh", "hpp", "s"]

EXTENSIONS = SKETCH_EXTENSIONS + OTHER_ALLOWED_EXTENSIONS

DEFAULT_EXTENSION = "ino"

# Compiled artifacts land in the build path and in this subfolder of it
BUILD_SKETCH_SUBFOLDER = "sketch"

CODE_FOLDER = "code"
DATA_FOLDER = "data"

# Default filename policy
MAX_NAME_LENGTH = 63
