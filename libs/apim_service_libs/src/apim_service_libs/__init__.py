"""Shared service libraries for the APIM proxy services.

Provides structured logging, the structured error model and the settings
base used by every service in this repository.
"""
