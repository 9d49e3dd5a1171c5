"""FastAPI application module for CoocRec.

This module contains the FastAPI application, route handlers, and API
endpoints for the recommendation service.
"""
