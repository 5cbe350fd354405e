"""
Dota Combat Log Analyzer

This package parses Dota combat logs into typed events, stores them per match
and answers kill, item, spell and damage queries over a stored match.
"""

__version__ = '0.1.0'
