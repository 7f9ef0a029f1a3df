# config/settings/test.py

from .base import *

# === TESTS ===

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

SECRET_KEY = 'planify-test-secret'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'planify-test-cache',
    }
}

SESSION_ENGINE = 'django.contrib.sessions.backends.db'

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

PLANIFY_MAX_FREE_BOARDS = 5

# SQLite has no deferrable unique constraints
SILENCED_SYSTEM_CHECKS = ['models.W038']

# Quiet logs in tests
LOGGING['handlers'] = {'null': {'class': 'logging.NullHandler'}}
LOGGING['root'] = {'handlers': ['null'], 'level': 'WARNING'}
LOGGING['loggers'] = {
    'apps': {'handlers': ['null'], 'level': 'DEBUG', 'propagate': True},
}
