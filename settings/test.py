from .base import *  # pylint: disable=wildcard-import,unused-wildcard-import

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

# Keep the console quiet during test runs.
LOGGING['loggers']['lus']['level'] = 'WARNING'

# Short enough that a stuck audio evaluator does not stall the suite.
LUS_AUDIO_EVALUATION_TIMEOUT = 2
