"""
Test suite for the ourmemories application.

This module contains all test cases for the application:
- Unit tests for models, services, API routes and UI handlers
"""
