"""Default values for the workflow configuration."""

TWGIT_DIRNAME = ".twgit"
CONFIG_FILENAME = "config.yaml"

DEFAULT_COMMAND = "twgit"
DEFAULT_ORIGIN = "origin"
DEFAULT_STABLE = "stable"

DEFAULT_PREFIXES = {
    "feature": "feature-",
    "release": "release-",
    "hotfix": "hotfix-",
    "demo": "demo-",
    "tag": "v",
}

DEFAULT_FIRST_COMMIT_MESSAGE = "[twgit] Init %s %s %s"
DEFAULT_PREFIX_COMMIT_MESSAGE = "[twgit]"
DEFAULT_SUBJECT_FILENAME = ".twgit_features_subject"

ORIGIN_ENV_VAR = "TWGIT_ORIGIN"
STABLE_ENV_VAR = "TWGIT_STABLE"
