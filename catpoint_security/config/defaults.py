"""Default configuration values and constants."""

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json"
}

# Haar cascades bundled with OpenCV, tried in order
CASCADE_FILES = (
    "haarcascade_frontalcatface_extended.xml",
    "haarcascade_frontalcatface.xml"
)

# Classifier tuning for the OpenCV backend
CLASSIFIER_SETTINGS = {
    "scale_factor": 1.1,
    "min_neighbors": 3,
    "min_size": (30, 30),
    "max_upload_mb": 16
}

VALID_CLASSIFIER_BACKENDS = ("fake", "opencv")
VALID_REPOSITORY_BACKENDS = ("memory", "json")
