# todos/tests/__init__.py
"""
Todo App Test Suite
===================

Unit and integration tests for the todos application.

Modules:
--------
- test_prioritization: sanitizer, reconciler, atomic updater, classifier and pipeline
- test_digest: digest ordering, HTML rendering and mail delivery
- test_views: HTTP endpoints (CRUD, /todos/prioritize, /todos/email-tasks)

Running Tests:
--------------
    # From the repository root
    pytest

    # Or through Django's runner
    cd backend && python manage.py test todos
"""
