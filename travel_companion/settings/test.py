from .base import *

DEBUG = False

SECRET_KEY = 'travel-companion-tests'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer',
    }
}

TRAVEL_MATCHING_DISCOVERY_LIMIT = 20
TRAVEL_MATCHING_MIN_COMPATIBILITY = 0

# Let pytest's caplog see app log records
LOGGING['loggers']['travel_matching']['propagate'] = True
LOGGING['loggers']['profiles']['propagate'] = True
