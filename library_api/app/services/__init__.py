"""
Service layer abstraction.

Each service encapsulates business logic for a domain and depends only
on a repository interface, so storage backends can be swapped without
changing API handlers.
"""
