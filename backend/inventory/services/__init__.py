"""
Services Module
Business logic layer for the application.

Services validate input and coordinate the stores. They are the surface
exposed to the presentation layer.
"""
