"""
Complaints filed by users and moderated by administrators.
"""
