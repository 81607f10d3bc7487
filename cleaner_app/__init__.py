"""Field operations data core for cleaners: task cache, calendar and timeline view models"""

__version__ = "1.0.0"
