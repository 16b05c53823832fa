"""Model parts package.

One concern per module; import from ``openai_interface.base.models`` for the
stable surface.
"""
