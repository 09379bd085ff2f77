"""
Infrastructure layer module.

This module contains concrete implementations of the domain oracle protocols,
integrating with external services over HTTP.

Key components:
- wolfram/: Wolfram Alpha symbolic-math oracle client
- judge0/: Judge0 code execution sandbox client
"""
