"""
Fabulous CLI

Command-line interface for the Fabulous registrar API.
"""
