"""
Base settings for the LUS assessment project.
"""

import os

DEBUG = True

ADMINS = (
    ('admin', 'admin'),
)

MANAGERS = ADMINS

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',  # Add 'postgresql', 'mysql', 'sqlite3' or 'oracle'.
        'NAME': 'lusdb',                         # Or path to database file if using sqlite3.
        'USER': '',                              # Not used with sqlite3.
        'PASSWORD': '',                          # Not used with sqlite3.
        'HOST': '',                              # Set to empty string for localhost. Not used with sqlite3.
        'PORT': '',                              # Set to empty string for default. Not used with sqlite3.
    }
}

TIME_ZONE = 'Europe/Stockholm'

LANGUAGE_CODE = 'en-us'

USE_I18N = True

USE_TZ = True

# Make this unique, and don't share it with anybody.
SECRET_KEY = 'lus-development-key-do-not-use-in-production'

INSTALLED_APPS = (
    'django.contrib.auth',
    'django.contrib.contenttypes',

    # lus apps
    'lus',
    'lus.assessment',
)

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'default_loc_mem',
    },
}

BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'lus': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': True,
        },
    },
}

# Evaluator type name -> dotted path of the EvaluationStrategy class.
LUS_EVALUATORS = {
    'manual': 'lus.assessment.evaluators.manual.ManualEvaluator',
    'levenshtein': 'lus.assessment.evaluators.levenshtein.LevenshteinStrategy',
}

# Only loaded when LUS_ENABLE_AI_EVALUATION is set.
LUS_AI_EVALUATORS = {
    'ai': 'lus.assessment.evaluators.ai.AIEvaluator',
}
LUS_ENABLE_AI_EVALUATION = False

LUS_PRIMARY_EVALUATOR = 'manual'

# Evaluator types used when the caller does not pass any.
# None means "the primary evaluator only".
LUS_ENABLED_EVALUATORS = None

# Overrides for LevenshteinStrategy.DEFAULT_CONFIG
LUS_LEVENSHTEIN_CONFIG = {}

# Seconds one audio evaluation may run before it is abandoned.
LUS_AUDIO_EVALUATION_TIMEOUT = 30

# Similarity (0-100) at or above which a submitted answer counts as correct.
LUS_CORRECT_ANSWER_THRESHOLD = 90

# Seconds passage and assessment reads stay cached.
LUS_CACHE_TIMEOUT = 300
