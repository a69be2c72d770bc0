"""Work-time tracker package.

Feature modules (attendance, schedules) sit on top of a pure time-accounting
core (``timekeeping``) with a thin Flask controller layer and
service/repository layers.
"""
