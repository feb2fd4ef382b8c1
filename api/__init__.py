"""
HTTP surface for the resource directory (FastAPI).
"""
