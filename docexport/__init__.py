"""Export pipeline for content extracted from uploaded documents.

Packages:
- docexport.docs: document model, JSON reader, TXT/DOCX writers, export session
- docexport.render: HTML preview of the document model
"""
