"""
HTTP middleware shared by every router.
"""
