"""
Document Cache Global Constants

Centralized location for package-wide constants.
"""

# Application Constants
APP_NAME = "doccache"
APP_VERSION = "0.1.0"
