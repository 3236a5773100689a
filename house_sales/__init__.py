"""
Core package for the house sales market dashboard.

Submodules provide source loading, cleaning, filtering, aggregation, scale
building and scene rendering helpers that are orchestrated by the top-level
`app.py`.
"""
