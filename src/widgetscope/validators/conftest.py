"""
Shared fixtures for widgetscope validators.
"""
from widgetscope.validators.shared_fixtures import *  # noqa: F401,F403
