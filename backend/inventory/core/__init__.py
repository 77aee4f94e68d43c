"""
Core Module
Configuration, constants and exceptions shared by every layer.
"""
