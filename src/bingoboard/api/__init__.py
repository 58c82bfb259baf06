"""bingoboard - FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request/response
models, and the catalog lookups used to fill board cells.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
book_search
    Google Books volume search with response caching.
"""
