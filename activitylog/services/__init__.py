"""
Services for recording activities.
"""
