"""
Gameplay core for Underwell Pit.
NO UI DEPENDENCIES.
"""
