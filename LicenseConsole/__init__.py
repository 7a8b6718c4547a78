"""
License Console Django project.
"""
