"""
technotes Backend - users, notes and authentication REST API

Keeps track of technical notes (tickets) assigned to employees.

Version: 1.0.0
"""

__version__ = "1.0.0"
