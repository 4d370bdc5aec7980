"""
Appointment Scheduling API

A FastAPI service for user authentication and appointment scheduling,
exposed through REST auth endpoints and a GraphQL query/mutation API.
"""

__version__ = "1.0.0"
