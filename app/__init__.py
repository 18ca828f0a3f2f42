"""
Doctors Portal

A FastAPI service over MongoDB for listing open appointment slots, booking
treatments and managing admin users.
"""

__version__ = "1.0.0"
