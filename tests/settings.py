""" Minimal Django settings for running unit tests outside of the LMS """
SECRET_KEY = 'discourse-activity-tests'

DEBUG = True
USE_TZ = True

INSTALLED_APPS = []

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'APP_DIRS': False,
    },
]

API_LOOPBACK_ADDRESS = 'http://127.0.0.1:8000'
