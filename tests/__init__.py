"""
Test suite for the Appointment Scheduling API.

Contains unit and integration tests for the application's functionality.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite://"
