"""
tokenloom core: export loading, mode selection, alias resolution, formatting.
"""
