"""
Pydantic schema package.

Domain-specific schema modules live here:
- job_documents.py
- video_analysis.py
"""
