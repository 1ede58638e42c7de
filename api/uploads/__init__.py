"""
Media uploads: one file per request, stored on local disk.
"""
