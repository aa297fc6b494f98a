from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

# Database for development
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# In-process channel layer, no Redis needed locally
CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer',
    }
}

LOGGING['loggers']['travel_matching']['level'] = 'DEBUG'
