"""
Activity log for Django.

Records who did what, to what, under a named log channel.
"""
