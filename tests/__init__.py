"""
Test suite for the Doctors Portal backend.

Contains unit tests for the booking logic and integration tests for the API.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
