"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Storage backends and the content store on top of them
- Record repository over the Django ORM
- Job queue for variant generation (Celery)
- Requester identity from tokens and sessions

Keep infrastructure concerns separate from business logic.
"""
