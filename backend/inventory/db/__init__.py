"""
Database Module
Declarative base and session management.
"""
