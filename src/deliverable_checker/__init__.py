"""
Deliverable Checker

Extracts student web-project submissions, organizes them per student,
validates HTML/CSS/JS with the W3C validator and drafts AI feedback.
"""

__version__ = "0.1.0"
