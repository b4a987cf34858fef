"""
License Registry Service Django project.
"""
