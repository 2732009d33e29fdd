"""Attendance Tracker package.

Organized by feature modules (attendance, reports) with a thin Flask
controller layer over service/repository layers. The attendance session
engine lives in ``attendance.service``.
"""
