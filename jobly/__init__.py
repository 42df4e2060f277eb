"""
Jobly API package: companies, the jobs they post, and the users who apply.
"""

__version__ = "1.0.0"
