"""
Django settings for the timetable planner.

The planner has no database of its own: catalogue data arrives fully
populated in each request and generated timetables are returned, not stored.
"""

import os

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "timetable-planner-insecure-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

INSTALLED_APPS = [
    "rest_framework",
    "timetable_planner",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "planner_project.urls"

DATABASES = {}

USE_TZ = True

TIME_ZONE = "UTC"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
}

# Generation tunables read by the timetable views
TIMETABLE_GENERATION = {
    "MAX_RESULTS": int(os.environ.get("TIMETABLE_MAX_RESULTS", 100)),
    "TIMEOUT_SECONDS": float(os.environ.get("TIMETABLE_TIMEOUT_SECONDS", 90)),
}
