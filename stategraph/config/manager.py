"""
 Read state graph configurations from YAML files.
"""
import logging

import yaml

from stategraph.config import config_parse
from stategraph.config import ConfigError

log = logging.getLogger(__name__)


def from_string(content):
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError("Invalid config format: %s" % str(e))


def read(path):
    with open(path) as fh:
        return from_string(fh)


def load(path):
    """Read and validate the state graph config at `path`."""
    log.info("Loading state graph config from %s", path)
    try:
        content = read(path)
    except (IOError, OSError) as e:
        raise ConfigError("Failed to read %s: %s" % (path, e))
    return config_parse.valid_config(content, name=path)
