"""
Infrastructure layer: persistence, identity resolution and the HTTP surface.
"""
