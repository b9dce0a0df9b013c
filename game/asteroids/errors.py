"""
Exceptions raised by the asteroids game core
"""


class ConfigurationError(ValueError):
    """Invalid configuration value or missing collaborator"""
