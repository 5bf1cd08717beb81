"""
Doctors Portal

A FastAPI backend for booking medical appointments: users and roles,
doctors, treatment services, bookings and per-day slot availability.
"""

__version__ = "1.0.0"
