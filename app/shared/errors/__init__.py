"""
Shared error handling package.

Classifies every failure into the closed domain taxonomy once,
then renders it into the single external error shape.
"""
