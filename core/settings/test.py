from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-only"
ALLOWED_HOSTS = ["testserver"]

# Slow-call warnings would only be noise here
IMPRESSION_SLOW_CALL_SECONDS = 60.0

LOGGING["loggers"]["apps"]["level"] = "CRITICAL"
