"""
Adapter layer for the Images API.

Contains the object store abstraction, its S3 implementation, and the
upload service that names and stores validated images.
"""
