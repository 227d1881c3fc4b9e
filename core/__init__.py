"""Django project package for the ad impression service."""
