"""
Heroes bounded context: HTTP interface.
"""
