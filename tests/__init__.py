"""
Test suite for the Doctors Portal API.

Contains unit and integration tests for availability, booking and access control.
"""
