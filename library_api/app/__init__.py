"""
Application package initializer.

This package contains the application factory and its submodules:
``core`` (configuration, logging, errors, database helpers),
``schemas`` (pydantic payloads), ``storage`` (repository interface and
backends), ``services`` (business logic) and ``api`` (versioned
FastAPI routers).  Build an application with
``library_api.app.main.create_app``.
"""
