class ConfigError(Exception):
    """Generic exception class for errors with config validation"""
    pass
